from briefdesk.models.access import Permission, Role
from briefdesk.models.activity_log import ActivityLog
from briefdesk.models.brief import Brief, BriefAssignHistory
from briefdesk.models.catalog import (
    Agency,
    Brand,
    Department,
    Designation,
    Industry,
    LeadSubSource,
    MissCampaign,
    Team,
)
from briefdesk.models.lead import Lead, LeadAssignHistory
from briefdesk.models.lookups import BriefStatus, CallStatus, LeadStatus, PlannerStatus, Priority
from briefdesk.models.meeting import Meeting
from briefdesk.models.planner import Planner, PlannerHistory
from briefdesk.models.user import User

__all__ = [
    "ActivityLog",
    "Agency",
    "Brand",
    "Brief",
    "BriefAssignHistory",
    "BriefStatus",
    "CallStatus",
    "Department",
    "Designation",
    "Industry",
    "Lead",
    "LeadAssignHistory",
    "LeadStatus",
    "LeadSubSource",
    "Meeting",
    "MissCampaign",
    "Permission",
    "Planner",
    "PlannerHistory",
    "PlannerStatus",
    "Priority",
    "Role",
    "Team",
    "User",
]
