"""Credential capability: which API key is selected, and how to change it."""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Awaitable, Callable, Optional, Union

from dotenv import load_dotenv

from ..utils.logger import get_logger
from ..utils.errors import CredentialError

logger = get_logger(__name__)


class CredentialProvider(ABC):
    """Host-provided access to the user's API key.

    The pipeline never manages keys; it reads the current one right before
    each request so a newly selected key takes effect immediately.
    """

    @abstractmethod
    async def has_selected_key(self) -> bool:
        """Whether a usable key is currently selected."""
        pass

    @abstractmethod
    async def open_select_key(self) -> None:
        """Let the user select or change the key."""
        pass

    @abstractmethod
    def get_api_key(self) -> str:
        """Return the current key or raise CredentialError."""
        pass


class EnvCredentialProvider(CredentialProvider):
    """Reads the key from an environment variable.

    Selecting a key re-reads the .env file, so editing it and reconnecting
    is how a user changes keys.
    """

    def __init__(
        self,
        env_var: str = "GEMINI_API_KEY",
        dotenv_path: Optional[Union[str, Path]] = None,
    ):
        self.env_var = env_var
        self.dotenv_path = dotenv_path

    async def has_selected_key(self) -> bool:
        return bool(os.environ.get(self.env_var, "").strip())

    async def open_select_key(self) -> None:
        load_dotenv(self.dotenv_path, override=True)
        logger.info(
            "Reloaded credentials from environment",
            extra={
                "env_var": self.env_var,
                "key_present": bool(os.environ.get(self.env_var, "").strip()),
            }
        )

    def get_api_key(self) -> str:
        key = os.environ.get(self.env_var, "").strip()
        if not key:
            raise CredentialError(f"{self.env_var} is not set")
        return key


class StaticCredentialProvider(CredentialProvider):
    """Holds a key in memory; an optional selector supplies replacements."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        selector: Optional[Callable[[], Awaitable[Optional[str]]]] = None,
    ):
        self.api_key = api_key
        self.selector = selector

    async def has_selected_key(self) -> bool:
        return bool(self.api_key)

    async def open_select_key(self) -> None:
        if self.selector is None:
            logger.warning("No key selector configured; keeping current key")
            return

        new_key = await self.selector()
        if new_key:
            self.api_key = new_key
            logger.info("API key changed")

    def get_api_key(self) -> str:
        if not self.api_key:
            raise CredentialError("No API key selected")
        return self.api_key
