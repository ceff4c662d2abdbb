"""Small helpers for driving the API through the Flask test client."""

TEST_JWT_SECRET = "test-jwt-secret-0123456789abcdef"


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client, username: str, password: str = "secret1"):
    return client.post("/users/register", json={"username": username, "password": password})


def login(client, username: str, password: str):
    return client.post("/users/login", json={"username": username, "password": password})
