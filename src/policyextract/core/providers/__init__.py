"""Document submitter implementations."""

from policyextract.core.providers.anthropic import AnthropicSubmitter
from policyextract.core.providers.openai import OpenAISubmitter


__all__ = ["AnthropicSubmitter", "OpenAISubmitter"]
