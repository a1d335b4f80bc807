"""HTTP client for the member service's application validation endpoint."""

from __future__ import annotations

from typing import Optional

import aiohttp

from src.core.config import Settings, settings
from src.domain.errors import ValidationFailure


class MemberServiceClient:
    """Asks the member service whether a member owns an application."""

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        config: Settings = settings,
    ):
        self.base_url = config.member_service_url.rstrip("/")
        self.path = config.member_validation_path
        self.timeout = aiohttp.ClientTimeout(
            total=config.member_validation_timeout_seconds
        )
        self.session = session

    async def start(self):
        if self.session is None:
            self.session = aiohttp.ClientSession(timeout=self.timeout)

    async def validate(self, member_id: int, application_token: str) -> None:
        """Return normally on success, raise ``ValidationFailure`` otherwise."""
        if self.session is None:
            await self.start()
        async with self.session.post(
            f"{self.base_url}{self.path}",
            headers={"memberId": str(member_id)},
            json={"applicationToken": application_token},
            timeout=self.timeout,
        ) as resp:
            if resp.status >= 300:
                body = await resp.text()
                raise ValidationFailure(
                    f"member validation rejected ({resp.status}): {body[:200]}",
                    status=resp.status,
                )

    async def close(self):
        if self.session is not None and not self.session.closed:
            await self.session.close()
        self.session = None
