from .errors import QuantumWalkError, HashUnavailable, HashFailure, ResourceExhausted, InvalidInput
from .step import QuantumStep, QuantumConfig, StepCacheEntry, to_millis
from .hasher import Hasher, Sha256Hasher, hash_timestamp, is_valid_hash
from .duration import MAX_INTERVAL_MS, hash_to_duration, format_duration, parse_duration, parse_interval_string
from .cache import StepCache
from .generator import StepGenerator, DEFAULT_CONFIG
from .similarity import MatchStatistics, pearson_correlation, calculate_statistics, calculate_similarity
from .matching import (
    SequenceAlignment,
    MatchResult,
    MatchRequest,
    SequenceMatcher,
    parse_user_input,
    extract_intervals,
    find_best_alignment,
    match_sequence,
    parse_timestamp_string,
)

__all__ = [
    "QuantumWalkError",
    "HashUnavailable",
    "HashFailure",
    "ResourceExhausted",
    "InvalidInput",
    "QuantumStep",
    "QuantumConfig",
    "StepCacheEntry",
    "to_millis",
    "Hasher",
    "Sha256Hasher",
    "hash_timestamp",
    "is_valid_hash",
    "MAX_INTERVAL_MS",
    "hash_to_duration",
    "format_duration",
    "parse_duration",
    "parse_interval_string",
    "StepCache",
    "StepGenerator",
    "DEFAULT_CONFIG",
    "MatchStatistics",
    "pearson_correlation",
    "calculate_statistics",
    "calculate_similarity",
    "SequenceAlignment",
    "MatchResult",
    "MatchRequest",
    "SequenceMatcher",
    "parse_user_input",
    "extract_intervals",
    "find_best_alignment",
    "match_sequence",
    "parse_timestamp_string",
]
