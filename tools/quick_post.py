import sys
from datetime import datetime, timedelta, UTC
from pathlib import Path

# ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from fastapi.testclient import TestClient
from jose import jwt

from tasktracker.config import Settings
from tasktracker.main import create_app

settings = Settings.from_env()
subject = sys.argv[1] if len(sys.argv) > 1 else "quick_test_user"
token = jwt.encode(
    {"sub": subject, "exp": int((datetime.now(UTC) + timedelta(minutes=5)).timestamp())},
    settings.secret_key,
    algorithm=settings.algorithm,
)
headers = {"Authorization": f"Bearer {token}"}

with TestClient(create_app(settings)) as client:
    r = client.post("/tasks", json={"title": "quick post"}, headers=headers)
    print('status', r.status_code)
    try:
        print('json:', r.json())
    except Exception:
        print('text:', r.text)
    print('listed:', len(client.get("/tasks", headers=headers).json()))
