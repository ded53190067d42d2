"""Message rendering domain service.

Every outbound message (mail or chat) is produced here from a Jinja2
template. Built-in templates are plain text; the markdown variant is used
by chat transports that support it.
"""

from datetime import datetime

import logfire
from jinja2 import DictLoader, Environment, StrictUndefined, TemplateError
from jinja2.sandbox import SandboxedEnvironment

from enroll.config import APISettings, MessagesSettings
from enroll.domain.model.invite import Invite
from enroll.domain.value import Message

from .base import Service

TEMPLATES = {
    "welcome.subject": "Welcome to {{ server_name }}",
    "welcome.txt": (
        "Hi {{ username }},\n\n"
        "Your account has been created.\n"
        "{% if expiry %}It is valid until {{ expiry }}.\n{% endif %}"
        "\nSign in at {{ url }}\n"
    ),
    "confirmation.subject": "Confirm your email address",
    "confirmation.txt": (
        "Hi {{ username }},\n\n"
        "Follow the link below to confirm your email address and finish "
        "creating your account.\n\n{{ link }}\n\n"
        "The link expires in {{ hours }} hours.\n"
    ),
    "invite.subject": "You've been invited",
    "invite.txt": (
        "You've been invited to create an account.\n\n"
        "{{ link }}\n\n"
        "The invite is valid until {{ valid_till }}.\n"
    ),
    "expiry.subject": "Invite expired: {{ code }}",
    "expiry.txt": (
        "Invite {{ code }}{% if label %} ({{ label }}){% endif %} expired "
        "at {{ valid_till }}.\n"
        "{% if used_by %}\nUsed by:\n"
        "{% for record in used_by %}- {{ record.identity }} at "
        "{{ record.used_at | when }}\n{% endfor %}"
        "{% else %}\nIt was never used.\n{% endif %}"
    ),
    "user_created.subject": "User created: {{ username }}",
    "user_created.txt": (
        "Account {{ username }} was created at {{ created }} using invite "
        "{{ code }}{% if label %} ({{ label }}){% endif %}.\n"
        "{% if address %}Contact: {{ address }}\n{% endif %}"
    ),
    "pin.subject": "Verification PIN",
    "pin.txt": "Your verification PIN is {{ pin }}.\n",
}


class MessageService(Service):
    """Renders outbound messages."""

    def __init__(
        self,
        messages_settings: MessagesSettings,
        api_settings: APISettings,
    ) -> None:
        """Initialize message service.

        Args:
            messages_settings: Date formatting preferences
            api_settings: Used to build invite and confirmation links
        """
        self.messages_settings = messages_settings
        self.api_settings = api_settings
        self.env = Environment(
            loader=DictLoader(TEMPLATES),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        self.env.filters["when"] = self.format_datetime
        # Admin-written announcement bodies
        self.sandbox = SandboxedEnvironment(trim_blocks=True, lstrip_blocks=True)

    def format_datetime(self, value: datetime) -> str:
        """Format a timestamp with the configured date and clock styles."""
        clock = "%H:%M" if self.messages_settings.use_24h else "%I:%M %p"
        return value.strftime(f"{self.messages_settings.date_format} {clock}")

    def _render(self, name: str, **variables) -> Message:
        text = self.env.get_template(f"{name}.txt").render(**variables)
        subject = self.env.get_template(f"{name}.subject").render(**variables)
        return Message(subject=subject, text=text, markdown=text)

    def invite_link(self, code: str) -> str:
        return f"{self.api_settings.frontend_url}/invite/{code}"

    def confirmation_link(self, token: str) -> str:
        return f"{self.api_settings.base_url}/provision/confirm/{token}"

    def welcome(self, username: str, expiry: datetime | None = None) -> Message:
        return self._render(
            "welcome",
            server_name="the media server",
            username=username,
            expiry=self.format_datetime(expiry) if expiry else "",
            url=self.api_settings.frontend_url,
        )

    def confirmation(self, username: str, token: str, hours: int) -> Message:
        return self._render(
            "confirmation",
            username=username,
            link=self.confirmation_link(token),
            hours=hours,
        )

    def invite(self, invite: Invite) -> Message:
        return self._render(
            "invite",
            link=self.invite_link(invite.code),
            valid_till=self.format_datetime(invite.valid_till),
        )

    def invite_expired(self, invite: Invite) -> Message:
        return self._render(
            "expiry",
            code=invite.code,
            label=invite.label,
            valid_till=self.format_datetime(invite.valid_till),
            used_by=invite.used_by,
        )

    def user_created(
        self, invite: Invite, username: str, created: datetime, address: str = ""
    ) -> Message:
        return self._render(
            "user_created",
            code=invite.code,
            label=invite.label,
            username=username,
            created=self.format_datetime(created),
            address=address,
        )

    def verification_pin(self, pin: str) -> Message:
        return self._render("pin", pin=pin)

    def announcement(self, subject: str, body: str, username: str) -> Message:
        """Render an admin-written announcement for one recipient.

        ``{{ username }}`` in the body is replaced with the recipient's name.

        Raises:
            ValueError: If the body is not a valid template
        """
        try:
            text = self.sandbox.from_string(body).render(username=username)
        except TemplateError as e:
            logfire.error("Announcement template failed to render", error=str(e))
            raise ValueError(f"Invalid announcement template: {e}") from e
        return Message(subject=subject, text=text, markdown=text)
