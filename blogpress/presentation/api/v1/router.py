"""V1 API router: aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from blogpress.presentation.api.v1.endpoints.health import router as health_router
from blogpress.presentation.api.v1.endpoints.articles import router as articles_router
from blogpress.presentation.api.v1.endpoints.cms import router as cms_router
from blogpress.presentation.api.v1.endpoints.cron import router as cron_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(articles_router)
router.include_router(cms_router)
router.include_router(cron_router)
