"""Configuration via pydantic-settings. Reads from .env or environment."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # ===== GOOGLE GEMINI (free image/chat providers, Veo video) =====
    # Process-wide key used by the free Gemini providers when the caller supplies none
    google_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_image_model: str = "imagen-3.0-generate-002"
    gemini_chat_model: str = "gemini-2.5-flash"
    gemini_text_model: str = "gemini-2.5-flash"
    veo_model: str = "veo-2.0-generate-001"

    # ===== OPENAI (DALL-E 3) =====
    openai_base_url: str = "https://api.openai.com/v1"
    openai_image_model: str = "dall-e-3"

    # ===== HUGGING FACE INFERENCE =====
    huggingface_inference_url: str = "https://api-inference.huggingface.co/models"
    huggingface_whoami_url: str = "https://huggingface.co/api/whoami-v2"
    huggingface_image_model: str = "stabilityai/stable-diffusion-3-medium-diffusers"
    huggingface_video_model: str = "stabilityai/stable-video-diffusion-img2vid-xt"
    huggingface_chat_model: str = "meta-llama/Meta-Llama-3-8B-Instruct"

    # ===== REPLICATE =====
    replicate_base_url: str = "https://api.replicate.com/v1"
    replicate_chat_model: str = "meta/meta-llama-3-70b-instruct"

    # ===== CHAT =====
    chat_max_new_tokens: int = 500

    # ===== VIDEO TIMING =====
    veo_poll_interval: float = 10  # seconds between operation status polls
    veo_max_poll_duration: float = 3600  # 0 = poll until done
    hf_video_max_attempts: int = 5
    hf_video_default_wait: float = 20  # seconds, when the upstream gives no estimate
    demo_video_delay: float = 1.5
    demo_video_url: str = "https://dummy-media.torchbox.com/media/video/1080p/big-buck-bunny.mp4"

    # ===== HTTP TIMEOUTS (seconds) =====
    http_timeout: float = 120
    validate_timeout: float = 10

    # ===== OUTPUT DIRECTORIES =====
    video_output_dir: str = ""  # Default: ./generated_videos

    # ===== SYSTEM =====
    log_level: str = "INFO"
    port: int = 8001
    cors_origins: list[str] = ["*"]


settings = Settings()
