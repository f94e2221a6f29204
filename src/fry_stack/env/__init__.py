"""Gymnasium environments for Fry Stack."""

from __future__ import annotations

from gymnasium.envs.registration import register

register(
    id="FryStack-v0",
    entry_point="fry_stack.env.fry_stack_env:FryStackEnv",
)

__all__ = ["FryStack-v0"]
