"""
Gemini vision backend.
"""

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from ...shared import AuthError, BackendError, RateLimitError, UnavailableError
from .base import BaseVisionAnalyzer


class GeminiVisionAnalyzer(BaseVisionAnalyzer):
    """Whiteboard analysis with Google Gemini."""
    
    name = "gemini"
    display_name = "Gemini"
    
    def _get_model(self):
        genai.configure(api_key=self.settings.require_gemini_api_key())
        return genai.GenerativeModel(self.settings.gemini_model)
    
    def _generate(self, prompt: str, image_data: bytes, mime_type: str) -> str:
        model = self._get_model()
        
        generation_config = genai.types.GenerationConfig(
            max_output_tokens=self.settings.vision_max_tokens,
            temperature=0.1,
        )
        
        try:
            response = model.generate_content([
                prompt,
                {
                    'mime_type': mime_type,
                    'data': image_data
                }
            ], generation_config=generation_config)
        except (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied):
            raise AuthError(
                "Gemini API key is invalid or expired. Please check your GEMINI_API_KEY."
            )
        except (google_exceptions.ResourceExhausted, google_exceptions.TooManyRequests):
            raise RateLimitError("Gemini API rate limit exceeded. Please try again in a moment.")
        except google_exceptions.ServerError:
            raise UnavailableError("Gemini API is temporarily unavailable. Please try again later.")
        except Exception as e:
            raise self._classify_message(str(e))
        
        try:
            text = response.text
        except ValueError:
            # No candidate parts, e.g. the reply was blocked
            raise BackendError("No text response from Gemini Vision")
        
        if not text or not text.strip():
            raise BackendError("No text response from Gemini Vision")
        return text.strip()
