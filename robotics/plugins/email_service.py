"""Robotics email composition and delivery through AWS SES."""

import logging
import re
from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Any, List, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..models.ccd import Appellant
from ..models.robotics import Email, EmailAttachment
from ..utils.errors import ErrorType, MappingError, handle_transport_error

logger = logging.getLogger(__name__)


class RoboticsEmailTemplate:
    """
    Builds the email that carries a robotics payload.

    Scottish cases go to a separate mailbox so the robot can route them to
    the Glasgow processing centre.
    """

    def __init__(self, sender: str, to: str, scottish_to: str, message: str = "Robotics Data"):
        self.sender = sender
        self.to = to
        self.scottish_to = scottish_to
        self.message = message

    def generate_email(
        self,
        subject: str,
        attachments: List[EmailAttachment],
        is_scottish: bool
    ) -> Email:
        return Email(
            sender=self.sender,
            to=self.scottish_to if is_scottish else self.to,
            subject=subject,
            message=self.message,
            attachments=list(attachments),
        )


class EmailService:
    """
    Sends emails with attachments using SES raw email.

    Attributes:
        ses: boto3 SES client
    """

    def __init__(
        self,
        region: str = "eu-west-2",
        connect_timeout: int = 10,
        read_timeout: int = 60,
        ses_client: Optional[Any] = None
    ):
        """
        Initialize the email service.

        Args:
            region: AWS region hosting the SES identity
            connect_timeout: Connection timeout in seconds
            read_timeout: Read timeout in seconds
            ses_client: Pre-built SES client (tests inject a stub)
        """
        if ses_client is not None:
            self.ses = ses_client
        else:
            config = Config(
                region_name=region,
                connect_timeout=connect_timeout,
                read_timeout=read_timeout,
                retries={"max_attempts": 0},  # no retries at this layer
            )
            self.ses = boto3.client("ses", config=config)

        logger.info(f"Initialized EmailService: region={region}")

    @staticmethod
    def generate_unique_email_id(appellant: Appellant) -> str:
        """
        Build the id used as email subject and attachment file stem.

        The id is the appellant's last name and the last three digits of
        their NINO, e.g. "Bloggs_123".

        Raises:
            MappingError: If the appellant has no last name or NINO
        """
        if appellant.name is None or not appellant.name.last_name:
            raise MappingError.missing_field("appeal.appellant.name.lastName")
        if appellant.identity is None or not appellant.identity.nino:
            raise MappingError.missing_field("appeal.appellant.identity.nino")

        digits = re.sub(r"\D", "", appellant.identity.nino)
        return f"{appellant.name.last_name}_{digits[-3:]}"

    def build_message(self, email: Email) -> MIMEMultipart:
        message = MIMEMultipart()
        message["Subject"] = email.subject
        message["From"] = email.sender
        message["To"] = email.to
        message.attach(MIMEText(email.message, "plain", "utf-8"))

        for attachment in email.attachments:
            maintype, _, subtype = attachment.content_type.partition("/")
            part = MIMEApplication(attachment.content, _subtype=subtype or "octet-stream")
            if maintype != "application":
                part.replace_header("Content-Type", attachment.content_type)
            part.add_header("Content-Disposition", "attachment", filename=attachment.filename)
            message.attach(part)

        return message

    def send_email(self, email: Email) -> str:
        """
        Send an email.

        Args:
            email: Email to send

        Returns:
            SES message id

        Raises:
            TransportError: If SES rejects or cannot be reached
        """
        message = self.build_message(email)
        try:
            response = self.ses.send_raw_email(
                Source=email.sender,
                Destinations=[email.to],
                RawMessage={"Data": message.as_string()},
            )
        except (ClientError, BotoCoreError) as e:
            handle_transport_error(
                error=e,
                error_type=ErrorType.EMAIL_SEND_FAILED,
                operation=f"Sending email '{email.subject}'",
                logger=logger,
            )

        message_id = response.get("MessageId", "")
        logger.info(
            f"Email '{email.subject}' sent to {email.to} with "
            f"{len(email.attachments)} attachment(s), message_id={message_id}"
        )
        return message_id
