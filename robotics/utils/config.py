"""Configuration management for robotics dispatch."""

import os
import yaml
from dataclasses import dataclass
from typing import Any, Dict

from .errors import ConfigurationError


@dataclass
class AwsConfig:
    """AWS SES configuration."""
    region: str
    connect_timeout: int
    read_timeout: int


@dataclass
class EmailConfig:
    """Robotics mailbox configuration."""
    sender: str
    to: str
    scottish_to: str
    message: str


@dataclass
class RoboticsConfig:
    """Payload schema and regional routing settings."""
    schema_path: str
    scottish_rpc_name: str


@dataclass
class VenueConfig:
    """Postcode to hearing venue lookup settings."""
    lookup_path: str
    default_venue: str


@dataclass
class DocumentStoreConfig:
    """Document management store configuration."""
    url: str
    timeout: int
    classification: str


@dataclass
class CcdConfig:
    """Core Case Data API configuration."""
    url: str
    timeout: int
    jurisdiction: str
    case_type: str


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str
    format: str
    file: str


@dataclass
class Config:
    """Main configuration class."""
    aws: AwsConfig
    email: EmailConfig
    robotics: RoboticsConfig
    venues: VenueConfig
    document_store: DocumentStoreConfig
    ccd: CcdConfig
    logging: LoggingConfig

    @classmethod
    def load(cls, config_path: str = "config.yaml") -> "Config":
        """
        Load configuration from file and environment variables.

        Environment variables override config file values:
        - AWS_REGION
        - ROBOTICS_EMAIL_FROM
        - ROBOTICS_EMAIL_TO
        - ROBOTICS_EMAIL_SCOTTISH_TO
        - AIRLOOKUP_CSV_PATH
        - DOCUMENT_STORE_URL
        - CORE_CASE_DATA_API_URL
        - LOG_LEVEL

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Config instance with loaded settings

        Raises:
            ConfigurationError: If the file or a required key is missing
        """
        if not os.path.exists(config_path):
            raise ConfigurationError.missing(config_path)

        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f) or {}

        aws = _section(config_data, "aws")
        aws_config = AwsConfig(
            region=os.getenv("AWS_REGION") or _required(aws, "aws", "region"),
            connect_timeout=int(aws.get("connect_timeout", 10)),
            read_timeout=int(aws.get("read_timeout", 60))
        )

        email = _section(config_data, "email")
        email_config = EmailConfig(
            sender=os.getenv("ROBOTICS_EMAIL_FROM") or _required(email, "email", "from"),
            to=os.getenv("ROBOTICS_EMAIL_TO") or _required(email, "email", "to"),
            scottish_to=os.getenv("ROBOTICS_EMAIL_SCOTTISH_TO") or _required(email, "email", "scottish_to"),
            message=email.get("message", "Robotics Data")
        )

        robotics = _section(config_data, "robotics")
        robotics_config = RoboticsConfig(
            schema_path=_required(robotics, "robotics", "schema_path"),
            scottish_rpc_name=robotics.get("scottish_rpc_name", "GLASGOW")
        )

        venues = _section(config_data, "venues")
        venue_config = VenueConfig(
            lookup_path=os.getenv("AIRLOOKUP_CSV_PATH") or _required(venues, "venues", "lookup_path"),
            default_venue=venues.get("default_venue", "Birmingham")
        )

        document_store = _section(config_data, "document_store")
        document_store_config = DocumentStoreConfig(
            url=os.getenv("DOCUMENT_STORE_URL") or _required(document_store, "document_store", "url"),
            timeout=int(document_store.get("timeout", 30)),
            classification=document_store.get("classification", "RESTRICTED")
        )

        ccd = _section(config_data, "ccd")
        ccd_config = CcdConfig(
            url=os.getenv("CORE_CASE_DATA_API_URL") or _required(ccd, "ccd", "url"),
            timeout=int(ccd.get("timeout", 30)),
            jurisdiction=ccd.get("jurisdiction", "SSCS"),
            case_type=ccd.get("case_type", "Benefit")
        )

        # Logging configuration
        log = config_data.get("logging", {}) or {}
        logging_config = LoggingConfig(
            level=os.getenv("LOG_LEVEL", log.get("level", "INFO")),
            format=log.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            file=log.get("file", "")
        )

        return cls(
            aws=aws_config,
            email=email_config,
            robotics=robotics_config,
            venues=venue_config,
            document_store=document_store_config,
            ccd=ccd_config,
            logging=logging_config,
        )


def _section(config_data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config_data.get(name)
    if section is None:
        raise ConfigurationError.missing(name)
    if not isinstance(section, dict):
        raise ConfigurationError.invalid(name, "expected a mapping")
    return section


def _required(section: Dict[str, Any], section_name: str, key: str) -> Any:
    value = section.get(key)
    if value in (None, ""):
        raise ConfigurationError.missing(f"{section_name}.{key}")
    return value
