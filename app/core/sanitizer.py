import re


def redact_pii(message: str) -> str:
    """Redact personally identifiable information from log messages.

    Form submitters send their email address and phone number; neither may
    reach the logs in clear text. SMTP credentials are masked as well.
    """
    if not isinstance(message, str):
        return str(message)

    # Emails: user@example.com -> u***@example.com
    message = re.sub(
        r"[\w.+-]+@[\w.-]+\.\w+",
        lambda m: m.group()[0] + "***@" + m.group().split("@")[1],
        message,
    )

    # IPs (IPv4): 192.168.1.100 -> 192.168.1.***
    message = re.sub(
        r"\b(\d{1,3}\.\d{1,3}\.\d{1,3}\.)\d{1,3}\b", r"\1***", message
    )

    # Phone numbers: +971 4 123 4567, 050-123-4567
    message = re.sub(
        r"(?<![\w.-])\+?\d[\d\s-]{7,}\d\b", "[PHONE_REDACTED]", message
    )

    # Password values in common patterns
    message = re.sub(
        r'(password|passwd|pwd|secret)["\']?\s*[:=]\s*["\']?[^"\'&\s]+',
        r"\1=[REDACTED]",
        message,
        flags=re.IGNORECASE,
    )

    return message
