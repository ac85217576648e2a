from __future__ import annotations

import logging

from fastapi import FastAPI

from sns_push.api.routes import router
from sns_push.config import settings

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logging.getLogger("botocore").setLevel(logging.ERROR)
logging.getLogger("boto3").setLevel(logging.ERROR)

app = FastAPI(
    title=settings.app_name,
    description="Register mobile devices with Amazon SNS and send APNs/GCM pushes",
    version="0.1.1",
    debug=settings.app_debug,
)
app.include_router(router)
