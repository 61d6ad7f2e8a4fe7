"""JSON Schema validation of robotics payloads."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from jsonschema import Draft7Validator

from ..utils.errors import ConfigurationError, RoboticsValidationError

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = Path(__file__).parent / "schema" / "sscs-robotics.json"


class RoboticsJsonValidator:
    """
    Validates payloads against the robotics JSON schema.

    The schema is loaded once, at construction.
    """

    def __init__(self, schema_path: Optional[Union[str, Path]] = None):
        path = Path(schema_path) if schema_path else DEFAULT_SCHEMA_PATH
        if not path.exists():
            raise ConfigurationError.missing(str(path))

        with open(path, 'r', encoding='utf-8') as f:
            self.schema = json.load(f)

        Draft7Validator.check_schema(self.schema)
        self._validator = Draft7Validator(self.schema)
        logger.info(f"Loaded robotics schema from {path}")

    def validate(self, payload: Dict[str, Any]) -> None:
        """
        Check a payload against the schema.

        Args:
            payload: Mapped robotics JSON

        Raises:
            RoboticsValidationError: Listing every schema violation found
        """
        errors = sorted(
            self._validator.iter_errors(payload),
            key=lambda e: [str(part) for part in e.absolute_path]
        )
        if errors:
            messages = [
                f"{'/'.join(str(part) for part in error.absolute_path) or '<root>'}: {error.message}"
                for error in errors
            ]
            logger.warning(f"Robotics JSON failed validation with {len(messages)} error(s)")
            raise RoboticsValidationError.from_messages(messages)
