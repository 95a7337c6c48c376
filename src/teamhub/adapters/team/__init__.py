"""Team, membership and invitation persistence."""
