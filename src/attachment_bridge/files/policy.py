"""Handling policies for batches of detected local files."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from enum import Enum
from pathlib import Path

from attachment_bridge.files.detection import FileReference


class HandlingDecision(Enum):
    """How a batch of detected local files should be treated."""

    UPLOAD = "upload"
    PROCESS_LOCALLY = "process_locally"
    CANCEL = "cancel"


class HandlingPolicy(ABC):
    """Strategy choosing one decision for a whole batch of detected files."""

    @abstractmethod
    def decide(self, references: Sequence[FileReference]) -> HandlingDecision:
        """Decide how to handle the detected files.

        Args:
            references: Files detected in a single message.

        Returns:
            The decision applied to every file in the batch
        """
        pass


class AlwaysUploadPolicy(HandlingPolicy):
    """Non-interactive default: every batch is uploaded."""

    def decide(self, references: Sequence[FileReference]) -> HandlingDecision:
        return HandlingDecision.UPLOAD


class FixedDecisionPolicy(HandlingPolicy):
    """Policy returning a preset decision, for hosts that ask ahead of time."""

    def __init__(self, decision: HandlingDecision) -> None:
        self.decision = decision

    def decide(self, references: Sequence[FileReference]) -> HandlingDecision:
        return self.decision


def format_local_path_notice(paths: Sequence[str | Path]) -> str:
    """Render the note asking a human how detected files should be handled.

    Args:
        paths: Paths as they should be shown to the user.

    Returns:
        A paragraph suitable for appending to the user's message.
    """
    listed = ", ".join(str(path) for path in paths)
    return (
        f"Note: I noticed you referenced local file path(s): {listed}. \n"
        "The remote agent can only access files that are explicitly shared. \n"
        "Would you like to upload this file, use remote processing instead, "
        "or cancel this request?"
    )


def decision_from_reply(reply: str) -> HandlingDecision | None:
    """Map a human reply to the local-path notice onto a decision.

    Returns:
        The decision the reply asks for, or None if it does not answer the notice
    """
    lowered = reply.lower()
    if "cancel" in lowered:
        return HandlingDecision.CANCEL
    if "remote processing" in lowered or "process locally" in lowered:
        return HandlingDecision.PROCESS_LOCALLY
    if "upload" in lowered:
        return HandlingDecision.UPLOAD
    return None
