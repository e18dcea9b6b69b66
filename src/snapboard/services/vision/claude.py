"""
Claude vision backend.
"""

import anthropic

from ...shared import AuthError, BackendError, RateLimitError, UnavailableError
from .base import BaseVisionAnalyzer


class ClaudeVisionAnalyzer(BaseVisionAnalyzer):
    """Whiteboard analysis with Anthropic Claude."""
    
    name = "claude"
    display_name = "Claude"
    
    def _get_client(self) -> anthropic.Anthropic:
        return anthropic.Anthropic(api_key=self.settings.require_anthropic_api_key())
    
    def _generate(self, prompt: str, image_data: bytes, mime_type: str) -> str:
        client = self._get_client()
        
        try:
            response = client.messages.create(
                model=self.settings.claude_model,
                max_tokens=self.settings.vision_max_tokens,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image",
                                "source": {
                                    "type": "base64",
                                    "media_type": mime_type,
                                    "data": self.encode_image(image_data),
                                },
                            },
                            {
                                "type": "text",
                                "text": prompt,
                            },
                        ],
                    }
                ],
            )
        except (anthropic.AuthenticationError, anthropic.PermissionDeniedError):
            raise AuthError(
                "Anthropic API key is invalid or expired. Please check your ANTHROPIC_API_KEY."
            )
        except anthropic.RateLimitError:
            raise RateLimitError("Claude API rate limit exceeded. Please try again in a moment.")
        except (anthropic.InternalServerError, anthropic.APIConnectionError):
            raise UnavailableError("Claude API is temporarily unavailable. Please try again later.")
        except anthropic.APIStatusError as e:
            if e.status_code >= 500:
                raise UnavailableError("Claude API is temporarily unavailable. Please try again later.")
            raise BackendError(f"Claude API error: {e.message}")
        except anthropic.APIError as e:
            raise self._classify_message(str(e))
        
        text_blocks = [block for block in response.content if getattr(block, "type", None) == "text"]
        if not text_blocks or not text_blocks[0].text.strip():
            raise BackendError("No text response from Claude Vision")
        return text_blocks[0].text.strip()
