"""
=============================================================================
CADUAE MAIL RELAY - CENTRALIZED EMAIL ADDRESS CONFIGURATION
=============================================================================

Every address the relay sends from or to lives here. These values are part
of the contract with the website forms, so change them only together with
the mailbox setup on mail.caduae.com.
=============================================================================
"""


class EmailConfig:
    """
    Fixed addresses used when relaying form submissions.

    Usage:
        from app.core.email_config import email_config

        sender = email_config.FORM_FROM
    """

    # =========================================================================
    # FORM SUBMISSIONS
    # =========================================================================

    # Envelope and header sender for every relayed submission
    FORM_FROM: str = "noreply@caduae.com"

    # Mailbox that receives contact, support and quote requests
    FORM_TO: str = "info@caduae.com"


# Singleton instance - import this in your code
email_config = EmailConfig()
