"""
Console mailer adapter - Implements ActivationMailer protocol.

This module provides a console-based implementation of the domain's
mailer port, logging activation links for demo purposes.
"""

import logging

logger = logging.getLogger(__name__)


class ConsoleActivationMailer:
    """
    Implements ActivationMailer protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - prints activation links to stdout.
    """

    def __init__(self, base_url: str) -> None:
        """
        Args:
            base_url: Public application URL the link is built on
        """
        self._base_url = base_url.rstrip("/")

    def activation_link(self, code: str) -> str:
        """Build the link that completes the activation."""
        return f"{self._base_url}/v1/activation/{code}"

    def send_activation(self, email: str, code: str) -> None:
        """
        Log the activation link to console (simulates email delivery).

        In production, this would be replaced with an SMTP adapter.

        Args:
            email: Recipient email address
            code: Activation code
        """
        logger.info("[ACTIVATION] Email: %s Link: %s", email, self.activation_link(code))
