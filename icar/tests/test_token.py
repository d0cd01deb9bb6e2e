import jwt

from icar.utils.token import decode_claims, is_token_expired, token_subject


def _token(**claims):
    return jwt.encode(claims, "test-signing-key-that-the-client-never-checks", algorithm="HS256")


def test_expired_token():
    token = _token(id="u1", exp=1_000)
    assert is_token_expired(token, now=2_000)
    assert not is_token_expired(token, leeway=5_000, now=2_000)


def test_token_without_exp_is_valid():
    assert not is_token_expired(_token(id="u1"))


def test_opaque_token_is_valid():
    assert decode_claims("opaque-session-token") is None
    assert not is_token_expired("opaque-session-token")


def test_token_subject():
    assert token_subject(_token(id="507f1f77bcf86cd799439011")) == "507f1f77bcf86cd799439011"
    assert token_subject(_token(sub="42")) == "42"
    assert token_subject("opaque") is None
