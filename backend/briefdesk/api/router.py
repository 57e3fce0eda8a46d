from fastapi import APIRouter

from briefdesk.api.routes import activity, auth, briefs, catalog, leads, planners, tasks, users

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(leads.router, prefix="/leads", tags=["leads"])
api_router.include_router(briefs.router, prefix="/briefs", tags=["briefs"])
api_router.include_router(planners.router, prefix="/planners", tags=["planners"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
for prefix, (repo, create_schema, update_schema, out_schema) in catalog.RESOURCES.items():
    api_router.include_router(
        catalog.build_crud_router(repo, create_schema, update_schema, out_schema),
        prefix=f"/{prefix}",
        tags=[prefix],
    )
api_router.include_router(activity.router, prefix="/activity-logs", tags=["activity"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
