"""JWT認証およびパスワードハッシュモジュール。

bcryptによるパスワードハッシュ、python-joseによるJWT生成・検証を提供する。
署名鍵や有効期限は呼び出し側から渡される ``Settings`` から取得する。
"""

from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from lifelog.config import Settings

ALGORITHM = "HS256"

# bcrypt はパスワードの先頭72バイトまでしか扱えない
MAX_PASSWORD_BYTES = 72

# ---------------------------------------------------------------------------
# パスワードハッシュ (bcrypt)
# ---------------------------------------------------------------------------


def password_too_long(password: str) -> bool:
    """UTF-8エンコード後のバイト数がbcryptの上限を超えるか判定する。"""
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: int = 10) -> str:
    """平文パスワードをbcryptでハッシュ化する。

    Args:
        password: 平文パスワード。
        rounds: bcryptのコストファクタ。

    Returns:
        bcryptハッシュ文字列。
    """
    return bcrypt.hashpw(
        password.encode("utf-8"),
        bcrypt.gensalt(rounds=rounds),
    ).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """平文パスワードとハッシュを照合する。

    72バイトを超えるパスワードは照合できないため不一致として扱う。

    Args:
        plain: 平文パスワード。
        hashed: bcryptハッシュ文字列。

    Returns:
        一致する場合True。
    """
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


# ---------------------------------------------------------------------------
# JWT (HS256)
# ---------------------------------------------------------------------------


def create_access_token(user_id: int, email: str, settings: Settings) -> str:
    """アクセストークンを生成する。

    ペイロードには ``sub`` (ユーザーID) と ``email`` を含める。

    Args:
        user_id: ユーザーID。
        email: メールアドレス。
        settings: アプリケーション設定。

    Returns:
        JWT文字列（HS256署名）。
    """
    now = datetime.now(timezone.utc)
    expire = now + timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    payload: dict = {
        "sub": str(user_id),
        "email": email,
        "type": "access",
        "exp": expire,
        "iat": now,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str, settings: Settings) -> dict:
    """JWTトークンを検証しペイロードを返す。

    Args:
        token: JWT文字列。
        settings: アプリケーション設定。

    Returns:
        デコード済みペイロード辞書。

    Raises:
        JWTError: トークンが無効、期限切れ、または種別が不一致の場合。
    """
    payload: dict = jwt.decode(
        token,
        settings.SECRET_KEY,
        algorithms=[ALGORITHM],
    )

    if payload.get("type") != "access":
        raise JWTError("Invalid token type: expected access")

    return payload
