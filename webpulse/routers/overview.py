from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, StreamingResponse
from fastapi.concurrency import run_in_threadpool

from webpulse.dependencies import get_current_user
from webpulse.models.status import format_due_date
from webpulse.models.user import User as UserModel
from webpulse.services.charts import project_status_chart, task_gauge_chart, task_status_chart
from webpulse.services.overview import Overview, build_overview

router = APIRouter(prefix="/overview", tags=["overview"])


def _summary(record) -> dict | None:
    if record is None:
        return None
    name = getattr(record, "project_name", None) or getattr(record, "task_name", None)
    return {"id": record.id, "name": name, "date_due": format_due_date(record.date_due)}


async def user_overview(current_user: UserModel = Depends(get_current_user)) -> Overview:
    projects = await current_user.awaitable_attrs.projects
    tasks = await current_user.awaitable_attrs.tasks
    return build_overview(projects, tasks)


@router.get("")
async def get_overview(overview: Overview = Depends(user_overview)):
    return overview.as_dict(describe=_summary)


async def _chart_response(render, overview: Overview):
    img_buf = await run_in_threadpool(render, overview)
    if not img_buf:
        return JSONResponse({"message": "No data"})
    return StreamingResponse(img_buf, media_type="image/png")


@router.get("/visualizations/projects")
async def get_project_status_chart(overview: Overview = Depends(user_overview)):
    return await _chart_response(project_status_chart, overview)


@router.get("/visualizations/tasks")
async def get_task_status_chart(overview: Overview = Depends(user_overview)):
    return await _chart_response(task_status_chart, overview)


@router.get("/visualizations/gauge")
async def get_task_gauge(overview: Overview = Depends(user_overview)):
    return await _chart_response(task_gauge_chart, overview)
