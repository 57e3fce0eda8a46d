"""Which interceptors watch which entity types."""

from __future__ import annotations

from briefdesk.models import (
    Agency,
    Brand,
    Brief,
    Department,
    Designation,
    Industry,
    Lead,
    LeadSubSource,
    Meeting,
    MissCampaign,
    Permission,
    Planner,
    Role,
    Team,
    User,
)
from briefdesk.services.activity_log import ActivityLogInterceptor
from briefdesk.services.brief_history import BriefHistoryInterceptor
from briefdesk.services.change_tracking import InterceptorRegistry
from briefdesk.services.lead_history import LeadHistoryInterceptor
from briefdesk.services.planner_history import PlannerHistoryInterceptor

ACTIVITY_LOGGED = (
    Agency,
    Brand,
    Lead,
    Brief,
    User,
    Department,
    Designation,
    Role,
    Permission,
    MissCampaign,
    Industry,
    LeadSubSource,
    Meeting,
    Team,
)


def build_registry() -> InterceptorRegistry:
    registry = InterceptorRegistry()
    activity = ActivityLogInterceptor()
    for model in ACTIVITY_LOGGED:
        registry.register(model, activity)
    registry.register(Lead, LeadHistoryInterceptor())
    registry.register(Brief, BriefHistoryInterceptor())
    registry.register(Planner, PlannerHistoryInterceptor())
    return registry


registry = build_registry()
