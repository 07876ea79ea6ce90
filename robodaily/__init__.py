"""RoboDaily - robotics / autonomous driving / embodied AI feed aggregation."""

__version__ = "0.1.0"
