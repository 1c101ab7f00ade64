"""Password obfuscation for the local cache.

The key is embedded in the program and shared by every installation, so this
only keeps the app password from sitting in the cache file as plain text. It
is not a confidentiality boundary.
"""

import os
from typing import Dict

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes


KEY = b'NSCcA4wvkQxTKaJp7fFJsQM7mR8WEghn'
IV_SIZE = 16


def _cipher(iv: bytes) -> Cipher:
    return Cipher(algorithms.AES(KEY), modes.CTR(iv))


def encrypt_password(plaintext: str) -> Dict[str, str]:
    """Encrypt a password with AES-256-CTR and a fresh random IV.

    Returns:
        Dictionary with hex encoded 'iv' and 'content'
    """
    iv = os.urandom(IV_SIZE)
    encryptor = _cipher(iv).encryptor()
    content = encryptor.update(plaintext.encode('utf-8')) + encryptor.finalize()
    return {'iv': iv.hex(), 'content': content.hex()}


def decrypt_password(ciphertext: Dict[str, str]) -> str:
    """Decrypt a password produced by encrypt_password.

    Raises:
        ValueError: If the stored value is not valid hex, has a bad IV or
            does not decode to text
    """
    iv = bytes.fromhex(ciphertext['iv'])
    if len(iv) != IV_SIZE:
        raise ValueError(f"Invalid IV length: {len(iv)}")
    decryptor = _cipher(iv).decryptor()
    plaintext = decryptor.update(bytes.fromhex(ciphertext['content'])) + decryptor.finalize()
    return plaintext.decode('utf-8')
