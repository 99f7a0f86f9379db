from .api_client import StudyShelfClient

__all__ = ["StudyShelfClient"]
