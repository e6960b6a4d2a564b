"""racetiming: reconstruct race results from raw timing-beacon exports."""

from racetiming.aggregate import consistency_score, generate_participant_summaries
from racetiming.config import (
    DEFAULT_ANALYSIS_CONFIG,
    AnalysisConfig,
    LoggingSettings,
    Settings,
    get_logging_settings,
    get_settings,
)
from racetiming.dedup import remove_duplicates
from racetiming.exceptions import (
    RaceTimingError,
    RunnerNotFoundError,
    RunnerStoreAPIError,
    RunnerStoreConnectionError,
    RunnerStoreError,
    RunnerStoreTimeoutError,
    RunnerStoreValidationError,
)
from racetiming.models import (
    AttemptStatus,
    ParticipantSummary,
    RaceAttempt,
    Runner,
    Session,
    TimingPoint,
    TimingRecord,
)
from racetiming.pairing import PairingStrategy, pair_starts_and_finishes
from racetiming.parser import parse_records
from racetiming.pipeline import AnalysisResult, analyze_race_data
from racetiming.runners import AsyncRunnerStoreClient, RunnerStoreClient
from racetiming.sessions import detect_sessions
from racetiming.validation import classify_duration, validate_race_durations

__all__ = [
    "DEFAULT_ANALYSIS_CONFIG",
    "AnalysisConfig",
    "AnalysisResult",
    "AsyncRunnerStoreClient",
    "AttemptStatus",
    "LoggingSettings",
    "PairingStrategy",
    "ParticipantSummary",
    "RaceAttempt",
    "RaceTimingError",
    "Runner",
    "RunnerNotFoundError",
    "RunnerStoreAPIError",
    "RunnerStoreClient",
    "RunnerStoreConnectionError",
    "RunnerStoreError",
    "RunnerStoreTimeoutError",
    "RunnerStoreValidationError",
    "Session",
    "Settings",
    "TimingPoint",
    "TimingRecord",
    "analyze_race_data",
    "classify_duration",
    "consistency_score",
    "detect_sessions",
    "generate_participant_summaries",
    "get_logging_settings",
    "get_settings",
    "pair_starts_and_finishes",
    "parse_records",
    "remove_duplicates",
    "validate_race_durations",
]

__version__ = "0.1.0"
