"""User-facing alert requests emitted on failure paths."""

from collections.abc import Callable, Mapping
import logging

from ..exceptions import AlertActionNotFoundError, AlertAlreadyResolvedError

logger = logging.getLogger(__name__)

type AlertAction = Callable[[], None]


class AlertRequest:
    """A failure notice with one or more selectable actions.

    The presentation layer shows the title and message, offers the action
    labels in order, and calls ``choose`` with the label the user picked.
    An alert resolves exactly once: the chosen action runs a single time
    and any later choice is rejected.

    Attributes:
        title: Alert title.
        message: Alert body, passed through from the failure.
    """

    def __init__(
        self,
        title: str,
        message: str,
        actions: Mapping[str, AlertAction],
    ):
        if not actions:
            raise ValueError("An alert requires at least one action.")
        self.title = title
        self.message = message
        self._actions: dict[str, AlertAction] = dict(actions)
        self._chosen_label: str | None = None

    @property
    def action_labels(self) -> list[str]:
        """Action labels in presentation order."""
        return list(self._actions)

    @property
    def resolved(self) -> bool:
        """Whether an action has already been chosen."""
        return self._chosen_label is not None

    @property
    def chosen_label(self) -> str | None:
        """Label of the chosen action, or None while unresolved."""
        return self._chosen_label

    def choose(self, label: str) -> None:
        """Run the action registered under ``label``.

        Args:
            label: The action label selected by the user.

        Raises:
            AlertActionNotFoundError: If no action has that label.
            AlertAlreadyResolvedError: If an action was already chosen.
        """
        if label not in self._actions:
            raise AlertActionNotFoundError(
                "Alert has no action with this label.",
                label=label,
                title=self.title,
            )
        if self._chosen_label is not None:
            raise AlertAlreadyResolvedError(
                f"Alert already resolved with '{self._chosen_label}'.",
                title=self.title,
            )

        self._chosen_label = label
        logger.debug(
            "Alert action chosen.",
            extra={"alert_title": self.title, "action_label": label},
        )
        self._actions[label]()

    def __repr__(self) -> str:
        return (
            f"AlertRequest(title={self.title!r}, message={self.message!r}, "
            f"actions={self.action_labels!r})"
        )
