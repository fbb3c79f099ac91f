"""
Encryption utilities for stored integration secrets (ERP database passwords)
Uses Fernet (symmetric encryption) from cryptography library
"""

import logging
from typing import Optional
from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
import base64

from campaign_settings.core.config import settings

logger = logging.getLogger(__name__)


class EncryptionError(Exception):
    """Custom exception for encryption errors"""
    pass


class SecretEncryption:
    """
    Handles encryption and decryption of integration secrets using Fernet.
    The key is derived from SECRET_KEY, so rotating it invalidates stored secrets.
    """

    SALT = b'campaign_settings_credentials'

    def __init__(self, secret_key: Optional[str] = None):
        self._cipher = self._initialize_cipher(secret_key or settings.SECRET_KEY)

    def _initialize_cipher(self, secret_key: str) -> Fernet:
        """
        Derive a 32-byte Fernet key from the secret key using PBKDF2

        Args:
            secret_key: Application secret

        Returns:
            Fernet cipher instance
        """
        if not secret_key or len(secret_key) < 16:
            raise EncryptionError("SECRET_KEY is not configured or too short")

        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=self.SALT,
            iterations=100000,
        )
        key_b64 = base64.urlsafe_b64encode(kdf.derive(secret_key.encode()))

        logger.info("Encryption cipher initialized successfully")
        return Fernet(key_b64)

    def encrypt(self, plaintext: str) -> str:
        """
        Encrypt plaintext string

        Args:
            plaintext: String to encrypt

        Returns:
            Fernet token as text
        """
        if not plaintext:
            raise EncryptionError("Cannot encrypt empty string")

        try:
            return self._cipher.encrypt(plaintext.encode()).decode('utf-8')
        except (TypeError, ValueError) as e:
            logger.error(f"Encryption failed: {e}")
            raise EncryptionError(f"Failed to encrypt data: {e}")

    def decrypt(self, ciphertext: str) -> str:
        """
        Decrypt ciphertext string

        Args:
            ciphertext: Fernet token produced by encrypt()

        Returns:
            Decrypted plaintext string
        """
        if not ciphertext:
            raise EncryptionError("Cannot decrypt empty string")

        try:
            return self._cipher.decrypt(ciphertext.encode()).decode('utf-8')
        except (InvalidToken, TypeError, ValueError) as e:
            logger.error(f"Decryption failed: {e!r}")
            raise EncryptionError("Failed to decrypt data")


# Global encryption instance
encryption = SecretEncryption()


def encrypt_secret(secret: str) -> str:
    """
    Convenience function to encrypt a secret

    Args:
        secret: Plaintext secret

    Returns:
        Encrypted secret
    """
    return encryption.encrypt(secret)


def decrypt_secret(encrypted_secret: str) -> Optional[str]:
    """
    Convenience function to decrypt a secret

    Args:
        encrypted_secret: Encrypted secret

    Returns:
        Decrypted secret or None if decryption fails
    """
    try:
        return encryption.decrypt(encrypted_secret)
    except EncryptionError:
        return None
