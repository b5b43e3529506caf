"""Shared enums for models.

Values are upper case because they are part of the public API payloads.
"""

from enum import Enum


class ProjectType(str, Enum):
    WEB3_APP = "WEB3_APP"
    SMART_CONTRACT = "SMART_CONTRACT"
    DAPP = "DAPP"
    DEFI = "DEFI"
    NFT = "NFT"
    DAO = "DAO"
    MARKETPLACE = "MARKETPLACE"
    GAME = "GAME"
    OTHER = "OTHER"


class ProjectStatus(str, Enum):
    """Project lifecycle state."""

    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    ARCHIVED = "ARCHIVED"
    ERROR = "ERROR"


class TemplateCategory(str, Enum):
    FRONTEND = "FRONTEND"
    BACKEND = "BACKEND"
    FULLSTACK = "FULLSTACK"
    SMART_CONTRACT = "SMART_CONTRACT"
    DEFI = "DEFI"
    NFT = "NFT"
    OTHER = "OTHER"


class AiRequestType(str, Enum):
    CODE_GENERATION = "CODE_GENERATION"
    CODE_REVIEW = "CODE_REVIEW"
    CODE_OPTIMIZATION = "CODE_OPTIMIZATION"
    CHAT = "CHAT"


class AiRequestStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
