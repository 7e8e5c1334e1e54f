"""Recruiting presentation layer: jobs, stages, members and public job pages."""

from __future__ import annotations

from fastapi import APIRouter

from recruiting.presentation import jobs, members, public

router = APIRouter()

router.include_router(public.router)
router.include_router(jobs.router)
router.include_router(members.router)

__all__ = ["router"]
