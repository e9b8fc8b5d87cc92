"""Program keypair cache.

Each generated program gets an Ed25519 keypair stored where ``anchor build``
and ``anchor deploy`` look for it: ``target/deploy/<name>-keypair.json``.  The
file holds a JSON array of 64 integers, the 32-byte secret seed followed by
the 32-byte public key.  The base58 public key is the program id embedded in
``declare_id!`` and ``Anchor.toml``.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

import base58
from nacl.signing import SigningKey

from .errors import KeypairError

KEYPAIR_LENGTH = 64
SEED_LENGTH = 32
KEYPAIR_FILE_MODE = 0o600


def keypair_path(root: Path, identifier: str) -> Path:
    """Return the conventional keypair location for program *identifier*."""
    return root / "target" / "deploy" / f"{identifier}-keypair.json"


def encode_pubkey(public_key: bytes) -> str:
    return base58.b58encode(public_key).decode("ascii")


def read_keypair_file(path: Path) -> SigningKey:
    """Load a Solana CLI keypair file.

    Raises:
        KeypairError: if the file is not a 64-byte JSON array or its public
            half does not match the secret seed.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise KeypairError(path, str(exc)) from exc

    if (
        not isinstance(data, list)
        or len(data) != KEYPAIR_LENGTH
        or not all(isinstance(b, int) and 0 <= b <= 255 for b in data)
    ):
        raise KeypairError(path, f"expected a JSON array of {KEYPAIR_LENGTH} bytes")

    raw = bytes(data)
    signing_key = SigningKey(raw[:SEED_LENGTH])
    if bytes(signing_key.verify_key) != raw[SEED_LENGTH:]:
        raise KeypairError(path, "public key does not match secret key")
    return signing_key


def write_keypair_file(signing_key: SigningKey, path: Path) -> None:
    """Write *signing_key* to *path*, readable by the owner only (``0o600``)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    raw = bytes(signing_key) + bytes(signing_key.verify_key)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, KEYPAIR_FILE_MODE)
    with os.fdopen(fd, "w", encoding="utf-8") as fh:
        fh.write(json.dumps(list(raw)))
    # O_CREAT leaves the mode of an existing file alone.
    os.chmod(path, KEYPAIR_FILE_MODE)


def get_or_create_program_id(root: Path, identifier: str) -> str:
    """Read the program keypair under *root*, creating it if it does not exist.

    A missing file is generated and persisted; an existing but corrupt file
    raises :class:`KeypairError` rather than being replaced, since the old key
    may already own a deployed program.

    Returns:
        The base58-encoded program id.
    """
    path = keypair_path(root, identifier)
    if path.exists():
        signing_key = read_keypair_file(path)
    else:
        signing_key = SigningKey.generate()
        try:
            write_keypair_file(signing_key, path)
        except OSError as exc:
            raise KeypairError(path, f"unable to create program keypair: {exc}") from exc
    return encode_pubkey(bytes(signing_key.verify_key))
