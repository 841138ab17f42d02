import logging
from functools import lru_cache
from typing import Any, Dict, List

from fastapi import BackgroundTasks, Body, Depends, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

import config
import queries
from auth import INVALID_CREDENTIALS
from database import open_storage
from schemas import HeroSettings, SiteSettings
from store import ContentStore
from uploads import (
    LocalFile,
    PhotoForm,
    PhotoUploadPipeline,
    RejectedFile,
    UploadPipeline,
    UploadStateError,
    UploadStep,
    VideoForm,
    VideoUploadPipeline,
)
from youtube import extract_youtube_id, youtube_thumbnail

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="CAMARA Studio API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# URL segment -> store collection
COLLECTIONS = {
    "statistics": "statistics",
    "portfolio": "portfolio",
    "youtube": "youtube_videos",
    "reviews": "reviews",
    "services": "services",
}

# In-flight upload pipelines by id
upload_sessions: Dict[str, UploadPipeline] = {}


@app.exception_handler(ValidationError)
async def validation_error_handler(request, exc: ValidationError):
    errors = exc.errors(include_url=False, include_context=False, include_input=False)
    return JSONResponse(status_code=422, content={"detail": errors})


@lru_cache()
def _default_store() -> ContentStore:
    return ContentStore.open(open_storage())


def get_store() -> ContentStore:
    return _default_store()


def require_admin(store: ContentStore = Depends(get_store)) -> ContentStore:
    if not store.session.is_authenticated:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return store


def _dump(items) -> List[Dict[str, Any]]:
    return [it.model_dump(mode="json") for it in items]


class LoginPayload(BaseModel):
    email: str
    password: str


@app.get("/")
async def root():
    return {"message": "CAMARA Studio API running"}


# Diagnostics
@app.get("/test")
async def test_storage(store: ContentStore = Depends(get_store)):
    response = {
        "backend": "✅ Running",
        "store": store.name,
        "storage": "❌ Not Available",
    }
    try:
        response.update(store.storage.describe())
        response["storage"] = "✅ Available"
    except Exception as e:
        response["storage"] = f"❌ Error: {str(e)[:50]}"
    return response


# Public site
@app.get("/api/statistics")
async def public_statistics(store: ContentStore = Depends(get_store)):
    return _dump(queries.statistic_view(store.statistics.all()))


@app.get("/api/portfolio")
async def public_portfolio(
    type: str = queries.ALL,
    category: str = queries.ALL,
    q: str = "",
    sort: str = "latest",
    store: ContentStore = Depends(get_store),
):
    items = queries.public_portfolio(store.portfolio.all(), type_filter=type, category=category, query=q, sort=sort)
    return _dump(items)


@app.get("/api/youtube")
async def public_youtube(category: str = queries.ALL, q: str = "", store: ContentStore = Depends(get_store)):
    return _dump(queries.youtube_view(store.youtube_videos.all(), category=category, query=q))


@app.get("/api/reviews")
async def public_reviews(store: ContentStore = Depends(get_store)):
    return _dump(queries.review_view(store.reviews.all()))


@app.get("/api/services")
async def public_services(store: ContentStore = Depends(get_store)):
    return _dump(queries.service_view(store.services.all()))


@app.get("/api/settings")
async def get_settings(store: ContentStore = Depends(get_store)):
    return store.site_settings.model_dump(mode="json")


@app.get("/api/hero")
async def get_hero(store: ContentStore = Depends(get_store)):
    return store.hero_settings.model_dump(mode="json")


# Admin session
@app.post("/api/admin/login")
async def admin_login(payload: LoginPayload, store: ContentStore = Depends(get_store)):
    if not store.login(payload.email, payload.password):
        raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)
    return store.session.model_dump()


@app.post("/api/admin/logout")
async def admin_logout(store: ContentStore = Depends(get_store)):
    store.logout()
    return {"ok": True}


@app.get("/api/admin/session")
async def admin_session(store: ContentStore = Depends(get_store)):
    return store.session.model_dump()


@app.get("/api/admin/dashboard")
async def admin_dashboard(store: ContentStore = Depends(require_admin)):
    return queries.dashboard_summary(store.state)


# Admin content CRUD
def _collection(store: ContentStore, name: str):
    field = COLLECTIONS.get(name)
    if field is None:
        raise HTTPException(status_code=404, detail=f"Unknown collection {name}")
    return store.collection(field)


def _new_record(name: str, data: Dict[str, Any], collection) -> Dict[str, Any]:
    data = dict(data)
    data.pop("id", None)
    if name in ("statistics", "youtube", "reviews", "services"):
        data.setdefault("order", collection.next_order())
    if name == "youtube":
        youtube_id = data.get("youtube_id") or extract_youtube_id(data.get("url", ""))
        data["youtube_id"] = youtube_id
        data.setdefault("thumbnail", youtube_thumbnail(youtube_id))
    return data


def _record_changes(name: str, data: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(data)
    # A new YouTube url points at a different video
    if name == "youtube" and "url" in data and not data.get("youtube_id"):
        youtube_id = extract_youtube_id(data["url"])
        data["youtube_id"] = youtube_id
        data.setdefault("thumbnail", youtube_thumbnail(youtube_id))
    return data


@app.get("/api/admin/content/{name}")
async def admin_list(
    name: str,
    type: str = queries.ALL,
    category: str = queries.ALL,
    q: str = "",
    sort: str = "latest",
    store: ContentStore = Depends(require_admin),
):
    items = _collection(store, name).all()
    if name == "portfolio":
        items = queries.admin_portfolio(items, type_filter=type, category=category, query=q, sort=sort)
    elif name == "youtube":
        items = queries.youtube_view(items, category=category, query=q, public=False)
    elif name == "reviews":
        items = queries.review_view(items, query=q, public=False)
    elif name == "statistics":
        items = queries.statistic_view(items, public=False)
    else:
        items = queries.service_view(items, public=False)
    return _dump(items)


@app.post("/api/admin/content/{name}")
async def admin_create(name: str, data: Dict[str, Any] = Body(...), store: ContentStore = Depends(require_admin)):
    collection = _collection(store, name)
    prefix = None
    if name == "portfolio":
        data = {**data, "type": data.get("type") or "photo"}
        prefix = "v" if data["type"] == "video" else "p"
    record = collection.create(_new_record(name, data, collection), prefix=prefix)
    return record.model_dump(mode="json")


@app.put("/api/admin/content/{name}/{item_id}")
async def admin_update(
    name: str, item_id: str, data: Dict[str, Any] = Body(...), store: ContentStore = Depends(require_admin)
):
    collection = _collection(store, name)
    if not collection.update(item_id, _record_changes(name, data)):
        raise HTTPException(status_code=404, detail="Not found")
    return collection.get(item_id).model_dump(mode="json")


@app.delete("/api/admin/content/{name}/{item_id}")
async def admin_delete(name: str, item_id: str, store: ContentStore = Depends(require_admin)):
    deleted = _collection(store, name).delete(item_id)
    return {"deleted": int(deleted)}


@app.put("/api/admin/settings")
async def update_settings(settings: SiteSettings, store: ContentStore = Depends(require_admin)):
    return store.set_site_settings(settings).model_dump(mode="json")


@app.put("/api/admin/hero")
async def update_hero(settings: HeroSettings, store: ContentStore = Depends(require_admin)):
    return store.set_hero_settings(settings).model_dump(mode="json")


# Uploads
def _upload_session(upload_id: str) -> UploadPipeline:
    pipeline = upload_sessions.get(upload_id)
    if pipeline is None:
        raise HTTPException(status_code=404, detail="Upload not found")
    return pipeline


def _sweep_upload_sessions() -> None:
    """Drop expired sessions, then the oldest ones until a new one fits under the cap."""
    by_age = sorted(upload_sessions.values(), key=lambda p: p.created_at)
    for i, pipeline in enumerate(by_age):
        expired = pipeline.age > config.UPLOAD_SESSION_TTL
        over_cap = len(by_age) - i >= config.MAX_UPLOAD_SESSIONS
        if not (expired or over_cap):
            break
        pipeline.close()
        upload_sessions.pop(pipeline.id, None)
        logger.info("Dropped %s upload %s (%s)", pipeline.kind, pipeline.id, "expired" if expired else "over cap")


@app.post("/api/admin/uploads/{kind}")
async def start_upload(
    kind: str,
    background_tasks: BackgroundTasks,
    files: List[UploadFile] = File(...),
    store: ContentStore = Depends(require_admin),
):
    if kind == "photos":
        pipeline: UploadPipeline = PhotoUploadPipeline(step_delay=config.UPLOAD_STEP_DELAY)
    elif kind == "videos":
        pipeline = VideoUploadPipeline(step_delay=config.UPLOAD_STEP_DELAY)
    else:
        raise HTTPException(status_code=404, detail=f"Unknown upload kind {kind}")

    # Type and size are checked before any bytes are read
    local_files, rejected_early = [], []
    for f in files:
        reason = pipeline.rejection_reason(f.content_type, f.size)
        if reason is not None:
            rejected_early.append(RejectedFile(f.filename or "", reason))
            continue
        local_files.append(LocalFile(f.filename or "", f.content_type or "", await f.read()))
    await pipeline.select(local_files, rejected_early)
    if pipeline.step is UploadStep.PROGRESS:
        _sweep_upload_sessions()
        upload_sessions[pipeline.id] = pipeline
        background_tasks.add_task(pipeline.run)
    return pipeline.summary()


@app.get("/api/admin/uploads/{upload_id}")
async def get_upload(upload_id: str, store: ContentStore = Depends(require_admin)):
    return _upload_session(upload_id).summary()


@app.put("/api/admin/uploads/{upload_id}/form")
async def update_photo_form(upload_id: str, form: PhotoForm, store: ContentStore = Depends(require_admin)):
    pipeline = _upload_session(upload_id)
    if not isinstance(pipeline, PhotoUploadPipeline):
        raise HTTPException(status_code=400, detail="Bulk form only applies to photo uploads")
    pipeline.update_form(form)
    return pipeline.summary()


@app.put("/api/admin/uploads/{upload_id}/files/{index}")
async def update_video_form(
    upload_id: str, index: int, form: VideoForm, store: ContentStore = Depends(require_admin)
):
    pipeline = _upload_session(upload_id)
    if not isinstance(pipeline, VideoUploadPipeline):
        raise HTTPException(status_code=400, detail="Per-file forms only apply to video uploads")
    try:
        pipeline.update_form(index, form)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return pipeline.summary()


@app.post("/api/admin/uploads/{upload_id}/confirm")
async def confirm_upload(upload_id: str, store: ContentStore = Depends(require_admin)):
    pipeline = _upload_session(upload_id)
    try:
        records = pipeline.confirm()
    except UploadStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    items = store.add_portfolio_batch(records)
    upload_sessions.pop(upload_id, None)
    return {"ok": True, "count": len(items), "ids": [it.id for it in items]}


@app.delete("/api/admin/uploads/{upload_id}")
async def close_upload(upload_id: str, store: ContentStore = Depends(require_admin)):
    pipeline = _upload_session(upload_id)
    pipeline.close()
    upload_sessions.pop(upload_id, None)
    return {"ok": True}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
