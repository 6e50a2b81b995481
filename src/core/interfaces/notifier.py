"""Abstract interface for the outbound alert channel."""

from abc import ABC, abstractmethod


class INotifier(ABC):
    """Delivers a text message to one chat on an external channel."""

    channel: str = "unknown"

    @abstractmethod
    async def send(self, chat_id: str | None, text: str) -> None:
        """
        Deliver a message.

        Raises:
            NotificationError: delivery failed.
        """
        pass
