"""
FastAPI dependencies - hand the startup-resolved collaborators to routes.
"""

from fastapi import Request

from nexusai.repositories.base import PlacementRepository
from nexusai.services.notifier import JobNotifier


def get_repository(request: Request) -> PlacementRepository:
    return request.app.state.repository


def get_notifier(request: Request) -> JobNotifier:
    return request.app.state.notifier
