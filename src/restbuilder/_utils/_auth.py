import base64


def basic_auth(username: str, password: str) -> str:
    """Return the base64 ``username:password`` token of a Basic Authorization header."""
    token = f"{username}:{password}".encode("utf-8")
    return base64.b64encode(token).decode("ascii")
