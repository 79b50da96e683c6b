"""题库文件: 序列化 + 可选加密, 作为录入结果的存储端"""
from __future__ import annotations
import pickle
import hashlib
import time
from pathlib import Path
from exam_entry_toolkit.dedup import deduplicate
from exam_entry_toolkit.models import Question

try:
    from cryptography.fernet import Fernet, InvalidToken
    HAS_CRYPTO = True
except ImportError:
    HAS_CRYPTO = False

MAGIC = b"QEB1"
DEFAULT_SUFFIX = ".qeb"


def _derive_key(password: str) -> bytes:
    import base64
    dk = hashlib.pbkdf2_hmac("sha256", password.encode(), b"exam_entry_salt", 100_000)
    return base64.urlsafe_b64encode(dk)


def _fernet(password: str) -> Fernet:
    if not HAS_CRYPTO:
        raise ImportError("加密/解密需要 cryptography 库: pip install cryptography")
    return Fernet(_derive_key(password))


def save_bank(
    questions: list[Question],
    output: Path,
    password: str | None = None,
) -> Path:
    fp = Path(output).with_suffix(DEFAULT_SUFFIX)
    fp.parent.mkdir(parents=True, exist_ok=True)

    payload = pickle.dumps(questions, protocol=pickle.HIGHEST_PROTOCOL)

    meta = {
        "count": len(questions),
        "created": time.time(),
        "encrypted": bool(password),
    }
    meta_bytes = pickle.dumps(meta)

    if password:
        payload = _fernet(password).encrypt(payload)

    with open(fp, "wb") as fh:
        fh.write(MAGIC)
        fh.write(len(meta_bytes).to_bytes(4, "big"))
        fh.write(meta_bytes)
        fh.write(payload)

    return fp


def read_meta(path: Path) -> dict:
    with open(path, "rb") as fh:
        if fh.read(4) != MAGIC:
            raise ValueError(f"不是有效的 {DEFAULT_SUFFIX} 文件: {path}")
        meta_len = int.from_bytes(fh.read(4), "big")
        return pickle.loads(fh.read(meta_len))


def load_bank(path: Path, password: str | None = None) -> list[Question]:
    with open(path, "rb") as fh:
        magic = fh.read(4)
        if magic != MAGIC:
            raise ValueError(f"不是有效的 {DEFAULT_SUFFIX} 文件: {path}")

        meta_len = int.from_bytes(fh.read(4), "big")
        meta = pickle.loads(fh.read(meta_len))

        payload = fh.read()

    if meta.get("encrypted"):
        if not password:
            raise ValueError("该题库已加密，请提供 --password")
        try:
            payload = _fernet(password).decrypt(payload)
        except InvalidToken:
            raise ValueError("密码错误或文件损坏")

    return pickle.loads(payload)


def append_to_bank(
    questions: list[Question],
    path: Path,
    password: str | None = None,
) -> tuple[list[Question], int]:
    """追加到已有题库（不存在则新建），按指纹去重，返回 (合并后列表, 实际新增数)"""
    fp = Path(path).with_suffix(DEFAULT_SUFFIX)
    existing = load_bank(fp, password) if fp.exists() else []
    combined = deduplicate(existing + list(questions))
    save_bank(combined, fp, password)
    return combined, len(combined) - len(existing)
