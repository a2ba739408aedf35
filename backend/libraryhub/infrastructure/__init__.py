"""Infrastructure — database sessions, repositories, clock, logging."""
