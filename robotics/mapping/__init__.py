"""Robotics JSON mapping and validation."""

from .robotics_mapper import RoboticsJsonMapper, get_case_code
from .validator import RoboticsJsonValidator

__all__ = ['RoboticsJsonMapper', 'RoboticsJsonValidator', 'get_case_code']
