"""Core module - Configuration, logging, and error handling."""

from openwork_skills.core.config import (
    ConfigManager,
    OpenworkConfig,
    SkillsConfig,
    build_skill_manager,
)
from openwork_skills.core.errors import (
    AlreadyExistsError,
    ClassifiedError,
    ErrorCategory,
    InvalidFormatError,
    InvalidNameError,
    NotFoundError,
    RecoveryHint,
    SkillError,
    ValidationError,
    classify_error,
)
