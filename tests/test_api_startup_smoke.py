from fastapi.testclient import TestClient


REQUIRED_ROUTES = {
    "/api/whatsapp/webhook",
    "/api/whatsapp/status",
    "/api/whatsapp/instance",
    "/api/whatsapp/qrcode",
    "/api/whatsapp/disconnect",
    "/api/whatsapp/send",
    "/api/freight/calculate",
    "/api/freight/config",
    "/api/notifications",
    "/api/notifications/generate",
    "/api/notifications/read-all",
    "/api/notifications/{notification_id}/read",
}


def test_api_startup_and_router_registration(monkeypatch):
    from app import main

    monkeypatch.setattr(main, "_startup_tasks", lambda: None)

    with TestClient(main.app) as client:
        response = client.get("/")
        docs_response = client.get("/docs")
        openapi_response = client.get("/openapi.json")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers.get("X-Request-ID")
    assert docs_response.status_code == 200
    assert openapi_response.status_code == 200

    paths = {route.path for route in main.app.routes}
    assert REQUIRED_ROUTES.issubset(paths)
