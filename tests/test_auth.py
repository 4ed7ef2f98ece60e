from crossword_api.services import auth_service


def test_token_round_trip() -> None:
    token = auth_service.create_access_token(42)
    payload = auth_service.verify_token(token)

    assert payload is not None
    assert payload["sub"] == "42"
    assert auth_service.user_id_from_token(token) == 42


def test_expired_token_is_rejected() -> None:
    token = auth_service.create_access_token(42, expires_minutes=-1)
    assert auth_service.verify_token(token) is None
    assert auth_service.user_id_from_token(token) is None


def test_garbage_token_is_rejected() -> None:
    assert auth_service.verify_token("not-a-jwt") is None
