import os
from pathlib import Path


class ClientConfig:
    BASE_URL = os.getenv("STUDYSHELF_API_URL", "http://localhost:5000/api")
    TIMEOUT = 10.0  # seconds
    DOWNLOAD_DIR = Path(os.getenv("STUDYSHELF_DOWNLOAD_DIR", "./downloads"))
    UPLOADS_PATH = "/uploads"
