"""A state machine and frame animator for sprite animations."""

__version__ = "0.7.0"
__all__ = ["animator", "state_machine"]