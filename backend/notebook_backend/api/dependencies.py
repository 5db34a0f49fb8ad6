from notebook_backend.repo import TaskGraphStore
from notebook_backend.services.dependency_service import DependencyService


def get_dependency_service() -> DependencyService:
    """FastAPI dependency returning a service bound to the default engine."""
    return DependencyService(TaskGraphStore())
