from userapi.core.store import StoreError
from userapi.flask_app import create_app


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.data == b"ok"


def test_ready_when_store_answers(client):
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.data == b"ready"


def test_not_ready_when_store_fails(app_config, mock_store):
    mock_store.all.side_effect = StoreError("connection refused")
    app = create_app(app_config, store=mock_store)

    with app.test_client() as client:
        response = client.get("/ready")

    assert response.status_code == 503
