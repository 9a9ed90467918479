"""SES based notification helper."""

from __future__ import annotations

import logging
import os
from typing import Iterable, Optional

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


class SesNotifier:
    def __init__(
        self,
        sender: Optional[str] = None,
        ses_client=None,
    ) -> None:
        self.sender = sender or os.environ.get("SES_SENDER_EMAIL")
        self._ses = (ses_client or boto3.client("ses")) if self.sender else None

    def send(self, subject: str, body: str, recipients: Iterable[str], html_body: Optional[str] = None) -> bool:
        if not self.sender or not self._ses:
            return False
        targets = [addr for addr in recipients if addr]
        if not targets:
            return False
        message_body = {"Text": {"Data": body, "Charset": "UTF-8"}}
        if html_body:
            message_body["Html"] = {"Data": html_body, "Charset": "UTF-8"}
        try:
            self._ses.send_email(
                Source=self.sender,
                Destination={"ToAddresses": targets},
                Message={
                    "Subject": {"Data": subject, "Charset": "UTF-8"},
                    "Body": message_body,
                },
            )
        except ClientError as error:
            # A failed confirmation mail must not fail the checkout.
            logger.warning("SES send failed: %s", error)
            return False
        return True
