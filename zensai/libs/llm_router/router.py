"""Policy-aware LLM router with provider budgeting."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, MutableMapping, Sequence

from .base import BaseProvider
from .types import LLMResponse, Task


class BudgetExceededError(RuntimeError):
    """Raised when a provider's daily budget has been exhausted."""


class AllProvidersFailedError(RuntimeError):
    """Raised when every provider in the policy failed for a request."""


@dataclass
class DailyBudget:
    """Tracks provider spend with automatic daily resets."""

    limit: float | None
    spent: float = 0.0
    day: date = field(default_factory=date.today)

    def register(self, amount: float | None, *, provider: str) -> None:
        """Record spend, enforcing the configured limit."""

        self._rollover_if_needed()
        if amount is None or amount <= 0:
            return
        if self.limit is not None and self.spent + amount > self.limit:
            raise BudgetExceededError(
                f"Daily budget exceeded for provider '{provider}': "
                f"{self.spent + amount:.4f} > {self.limit:.4f}"
            )
        self.spent += amount

    def exhausted(self) -> bool:
        self._rollover_if_needed()
        return self.limit is not None and self.spent >= self.limit

    def _rollover_if_needed(self) -> None:
        today = date.today()
        if today != self.day:
            self.day = today
            self.spent = 0.0


@dataclass
class LLMRouteConfig:
    """Configuration payload controlling provider order and budgets."""

    providers: list[str] = field(default_factory=list)
    provider_budgets: dict[str, float | None] = field(default_factory=dict)


class LLMRouter:
    """Route chat requests across configured providers with failover."""

    def __init__(
        self,
        *,
        config: LLMRouteConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._providers: dict[str, BaseProvider] = {}
        self._logger = logger or logging.getLogger(__name__)
        self._config = config or LLMRouteConfig()
        self._budgets: MutableMapping[str, DailyBudget] = {
            name: DailyBudget(limit)
            for name, limit in self._config.provider_budgets.items()
        }

    @property
    def has_providers(self) -> bool:
        return bool(self._providers)

    def register_provider(
        self,
        key: str,
        provider: BaseProvider,
        *,
        daily_budget: float | None = None,
    ) -> None:
        """Register or update a provider, optionally overriding its daily budget."""

        self._providers[key] = provider
        if daily_budget is not None:
            self._budgets[key] = DailyBudget(daily_budget)
        elif key not in self._budgets:
            self._budgets[key] = DailyBudget(self._config.provider_budgets.get(key))
        if key not in self._config.providers:
            self._config.providers.append(key)

    def set_policy(self, providers: Sequence[str]) -> None:
        """Assign the ordered list of providers tried for every request."""

        if not providers:
            raise ValueError("Provider policy requires at least one provider key")
        self._config.providers = list(dict.fromkeys(providers))

    async def chat(
        self,
        *,
        messages: Sequence[Mapping[str, Any]],
        model: str,
        task: Task | None = None,
        **kwargs: Any,
    ) -> LLMResponse:
        """Execute a chat request with automatic provider failover."""

        errors: list[str] = []
        for candidate in self._resolve_candidates():
            budget = self._budgets.get(candidate)
            if budget is not None and budget.exhausted():
                errors.append(f"{candidate}: daily budget exhausted")
                continue
            try:
                response = await self._execute(
                    candidate,
                    call_kwargs={"messages": [dict(m) for m in messages], "model": model, **kwargs},
                )
            except Exception as exc:
                self._logger.warning(
                    "Provider %s failed for %s task: %s",
                    candidate,
                    task.value if task else "chat",
                    exc,
                    exc_info=True,
                )
                errors.append(f"{candidate}: {exc}")
                continue
            response.task = task
            self._log_usage(candidate, response)
            return response
        raise AllProvidersFailedError(
            f"All providers failed for task '{task.value if task else 'chat'}': {'; '.join(errors)}"
        )

    async def _execute(
        self,
        provider_key: str,
        *,
        call_kwargs: dict[str, Any],
    ) -> LLMResponse:
        provider = self._providers.get(provider_key)
        if provider is None:
            raise ValueError(f"Provider '{provider_key}' is not registered")

        response = await provider.chat(**call_kwargs)
        if response.provider is None:
            response.provider = provider_key
        self._apply_budget(provider_key, response.cost)
        return response

    def _resolve_candidates(self) -> list[str]:
        """Return registered providers in priority order."""

        candidates = self._config.providers
        if not candidates:
            raise ValueError("No providers configured")
        resolved = [candidate for candidate in candidates if candidate in self._providers]
        if not resolved:
            raise ValueError("No registered providers available")
        return resolved

    def _apply_budget(self, provider_key: str, cost: float | None) -> None:
        tracker = self._budgets.get(provider_key)
        if tracker is None:
            tracker = DailyBudget(self._config.provider_budgets.get(provider_key))
            self._budgets[provider_key] = tracker
        tracker.register(cost or 0.0, provider=provider_key)

    def _log_usage(self, provider_key: str, response: LLMResponse) -> None:
        usage = response.usage or {}
        self._logger.info(
            "llm_task=%s provider=%s model=%s prompt_tokens=%s completion_tokens=%s total_tokens=%s cost=%.6f",
            response.task.value if response.task else "chat",
            provider_key,
            response.model,
            usage.get("prompt_tokens"),
            usage.get("completion_tokens"),
            usage.get("total_tokens"),
            (response.cost or 0.0),
        )


__all__ = [
    "AllProvidersFailedError",
    "BudgetExceededError",
    "DailyBudget",
    "LLMRouteConfig",
    "LLMRouter",
]
