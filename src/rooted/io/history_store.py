"""
JSONL-based storage for suggestion logs and biometric readings.

Handles reading, writing, and managing the files in the data directory.
"""

import json
import logging
from pathlib import Path

from ..core.engine.config_loader import get_rooted_home
from ..core.models import BiometricReading, Mood, SuggestionLog, UserProfile
from .serializers import (
    ValidationError,
    dict_to_reading,
    dict_to_suggestion_log,
    dict_to_user_profile,
    reading_to_dict,
    suggestion_log_to_json_line,
    user_profile_to_dict,
    validate_mood,
)

logger = logging.getLogger(__name__)


class HistoryStore:
    """
    Manages suggestion history stored in JSONL format.

    The history file holds one suggestion log per line, at most one per
    date. Sibling files in the same directory:
    - biometrics.jsonl: one wearable reading per line
    - profile.json: onboarding answers
    """

    def __init__(self, history_path: str | Path):
        """
        Initialize the history store.

        Args:
            history_path: Path to the JSONL suggestion history file
        """
        self.history_path = Path(history_path)
        self.profile_path = self.history_path.parent / "profile.json"
        self.biometrics_path = self.history_path.parent / "biometrics.jsonl"

    def exists(self) -> bool:
        """Check if the history file exists."""
        return self.history_path.exists()

    def init(self) -> None:
        """
        Initialize empty history and biometrics files if they don't exist.

        Creates parent directories if needed.
        """
        self.history_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.history_path.exists():
            self.history_path.touch()
        if not self.biometrics_path.exists():
            self.biometrics_path.touch()

    # ── Profile ─────────────────────────────────────────────────────────────

    def load_profile(self) -> UserProfile | None:
        """
        Load user profile from profile.json.

        Returns:
            UserProfile if file exists and is valid, None otherwise
        """
        if not self.profile_path.exists():
            return None

        try:
            with open(self.profile_path, "r") as f:
                data = json.load(f)
            return dict_to_user_profile(data)
        except (json.JSONDecodeError, ValidationError, ValueError) as e:
            logger.warning("Ignoring unreadable profile %s: %s", self.profile_path, e)
            return None

    def save_profile(self, profile: UserProfile) -> None:
        """
        Save user profile to profile.json.

        Args:
            profile: User profile to save
        """
        self.profile_path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.profile_path, "w") as f:
            json.dump(user_profile_to_dict(profile), f, indent=2)

    # ── Suggestion logs ─────────────────────────────────────────────────────

    def load_logs(self) -> list[SuggestionLog]:
        """
        Load all suggestion logs from the history file.

        Returns:
            List of SuggestionLog, sorted by date

        Raises:
            FileNotFoundError: If history file doesn't exist
            ValidationError: If a line cannot be parsed
        """
        if not self.history_path.exists():
            raise FileNotFoundError(
                f"History file not found: {self.history_path}. Run 'init' first."
            )

        logs: list[SuggestionLog] = []

        with open(self.history_path, "r") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue

                try:
                    logs.append(dict_to_suggestion_log(json.loads(line)))
                except (json.JSONDecodeError, ValidationError) as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.history_path}: {e}"
                    ) from e

        logs.sort(key=lambda log: log.date)

        return logs

    def get_log_for_date(self, date: str) -> SuggestionLog | None:
        """Return the suggestion log for a date, or None."""
        for log in self.load_logs():
            if log.date == date:
                return log
        return None

    def upsert_log(self, log: SuggestionLog) -> None:
        """
        Store a log, replacing any existing log for the same date.

        Args:
            log: Log to store
        """
        logs = [existing for existing in self.load_logs() if existing.date != log.date]
        logs.append(log)
        logs.sort(key=lambda entry: entry.date)
        self._write_logs(logs)
        logger.debug("Stored suggestion %s for %s", log.id, log.date)

    def mark_completed(self, log_id: str, mood: Mood | None = None) -> SuggestionLog:
        """
        Mark a suggestion completed, optionally recording a mood.

        Completing an already completed suggestion is a no-op apart from
        updating the mood when one is given.

        Args:
            log_id: Suggestion log id
            mood: Optional mood rating

        Returns:
            The updated log

        Raises:
            KeyError: If no log has this id
            ValidationError: If mood is not on the scale
        """
        validate_mood(mood)
        logs = self.load_logs()

        for log in logs:
            if log.id == log_id:
                if log.completed and mood is None:
                    return log
                log.completed = True
                if mood is not None:
                    log.mood = mood
                self._write_logs(logs)
                return log

        raise KeyError(f"Suggestion not found: {log_id}")

    def delete_log_at(self, index: int) -> None:
        """
        Delete the log at the given 0-based index in sorted history.

        Raises:
            IndexError: If index is out of range
        """
        logs = self.load_logs()
        if index < 0 or index >= len(logs):
            raise IndexError(f"Suggestion index {index} out of range (0-{len(logs) - 1})")
        del logs[index]
        self._write_logs(logs)

    def _write_logs(self, logs: list[SuggestionLog]) -> None:
        with open(self.history_path, "w") as f:
            for log in logs:
                f.write(suggestion_log_to_json_line(log) + "\n")

    # ── Biometrics ──────────────────────────────────────────────────────────

    def load_readings(self) -> list[BiometricReading]:
        """
        Load all biometric readings.

        Returns:
            Readings in file order; empty list if the file is missing

        Raises:
            ValidationError: If a line cannot be parsed
        """
        if not self.biometrics_path.exists():
            return []

        readings: list[BiometricReading] = []
        with open(self.biometrics_path, "r") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    readings.append(dict_to_reading(json.loads(line)))
                except (json.JSONDecodeError, ValidationError) as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.biometrics_path}: {e}"
                    ) from e
        return readings

    def append_reading(self, reading: BiometricReading) -> None:
        """Append one reading to biometrics.jsonl."""
        self.biometrics_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.biometrics_path, "a") as f:
            f.write(json.dumps(reading_to_dict(reading), separators=(",", ":")) + "\n")


def get_default_history_path() -> Path:
    """
    Get the default suggestion history path.

    Returns:
        <rooted home>/suggestions.jsonl
    """
    return get_rooted_home() / "suggestions.jsonl"


def get_default_store() -> HistoryStore:
    """
    Get a HistoryStore with the default path.

    Returns:
        HistoryStore instance
    """
    return HistoryStore(get_default_history_path())
