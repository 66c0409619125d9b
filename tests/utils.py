DEFAULT_PASSWORD = "secret-pass"


def register(client, email, *, role=None, full_name=None, password=DEFAULT_PASSWORD):
    payload = {"email": email, "password": password}
    if role is not None:
        payload["role"] = role
    if full_name is not None:
        payload["full_name"] = full_name
    response = client.post("/api/v1/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def login(client, email, password=DEFAULT_PASSWORD):
    response = client.post(
        "/api/v1/auth/login", json={"email": email, "password": password}
    )
    assert response.status_code == 200, response.text
    return response.json()


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
