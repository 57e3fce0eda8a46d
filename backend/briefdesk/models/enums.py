from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    SALES = "SALES"
    PLANNER = "PLANNER"


class RecordStatus(enum.IntEnum):
    ACTIVE = 1
    DEACTIVATED = 2
    DELETED = 15  # soft-deleted, row retained


class ChangeAction(str, enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    RESTORED = "restored"
    FORCE_DELETED = "force_deleted"


class CampaignMode(str, enum.Enum):
    PROGRAMMATIC = "programmatic"
    NON_PROGRAMMATIC = "non_programmatic"


class MediaType(str, enum.Enum):
    DOOH = "dooh"
    CTV = "ctv"
    OOH = "ooh"


MEDIA_TYPES_BY_MODE = {
    CampaignMode.PROGRAMMATIC: (MediaType.DOOH, MediaType.CTV),
    CampaignMode.NON_PROGRAMMATIC: (MediaType.DOOH, MediaType.OOH),
}


class LeadType(str, enum.Enum):
    BRAND = "brand"
    AGENCY = "agency"
