"""Alert wording used by the feed controller."""

from pydantic import BaseModel, Field, model_validator


class AlertTexts(BaseModel):
    """Titles and action labels for controller alerts.

    Attributes:
        full_fetch_failure_title: Title of the alert shown when loading the
            summary list fails.
        check_failure_title: Title of the alert shown when checking for new
            summaries fails.
        close_label: Label of the action that terminates the application.
        retry_label: Label of the action that reloads the summary list.
        acknowledge_label: Label of the single action on check failures.
    """

    full_fetch_failure_title: str = Field(
        default="Failed to load summaries",
        min_length=1,
        description="Title of the alert shown when the full summary list fails to load.",
    )
    check_failure_title: str = Field(
        default="request failed",
        min_length=1,
        description="Title of the alert shown when an incremental check fails.",
    )
    close_label: str = Field(
        default="close",
        min_length=1,
        description="Label of the action that terminates the application.",
    )
    retry_label: str = Field(
        default="retry",
        min_length=1,
        description="Label of the action that reloads the summary list.",
    )
    acknowledge_label: str = Field(
        default="ok",
        min_length=1,
        description="Label of the acknowledge-only action.",
    )

    @model_validator(mode="after")
    def validate_distinct_failure_actions(self) -> "AlertTexts":
        """Ensure the close and retry actions can be told apart.

        Returns:
            The validated instance.

        Raises:
            ValueError: If both actions share a label.
        """
        if self.close_label == self.retry_label:
            raise ValueError(
                f"close_label and retry_label must differ, both are '{self.close_label}'."
            )
        return self
