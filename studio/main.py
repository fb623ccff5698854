import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from studio.db import engine, Base

from studio.models.workflow_rule import WorkflowRule
from studio.models.workflow_execution import WorkflowExecution
from studio.models.media import Media
from studio.models.admin_notification import AdminNotification
from studio.models.outbound_email import OutboundEmail

from studio.routes.workflows import router as workflows_router
from studio.routes.events import router as events_router
from studio.routes.media import router as media_router
from studio.routes.admin import router as admin_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Studio Workflow Engine")

# ─── CORS ─────────────────────────────────────────────────────────
_default_origins = "http://localhost:3000,https://localhost:3000,http://127.0.0.1:3000,https://127.0.0.1:3000"

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", _default_origins).split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup():
    Base.metadata.create_all(bind=engine)


app.include_router(workflows_router)
app.include_router(events_router)
app.include_router(media_router)
app.include_router(admin_router)


@app.get("/")
def read_root():
    return {"message": "Studio Workflow Engine is running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8001)
