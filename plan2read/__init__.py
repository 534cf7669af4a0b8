"""Plan2Read - study schedule planner with community sharing and discussions"""

__version__ = "1.0.0"
