"""Local mlx-lm backend for turning a rendered prompt into an explanation."""
import os

from git_intent.utils import chunk_text

DEFAULT_MODEL = "mlx-community/Qwen2.5-Coder-1.5B-Instruct-4bit"
DEFAULT_MAX_TOKENS = 300


def model_name_from_env():
    return os.environ.get("GIT_INTENT_MODEL", "").strip() or DEFAULT_MODEL


def llm_disabled():
    """Allow opt-out in constrained environments without changing default behavior."""
    return os.environ.get("GIT_INTENT_SKIP_LLM", "").strip() == "1"


def _load_backend():
    """Lazy-load mlx-lm so commands that never call the model do not need it."""
    try:
        from mlx_lm import load, stream_generate
    except ImportError as exc:
        raise RuntimeError("Missing dependency: mlx-lm") from exc
    return load, stream_generate


def _as_chat_prompt(tokenizer, prompt_text):
    if getattr(tokenizer, "chat_template", None):
        messages = [{"role": "user", "content": prompt_text}]
        return tokenizer.apply_chat_template(messages, add_generation_prompt=True)
    return prompt_text


def stream_explanation(prompt_text, model_name=None, max_tokens=DEFAULT_MAX_TOKENS):
    """Yield the model's answer piece by piece as plain strings."""
    load, stream_generate = _load_backend()
    model, tokenizer = load(model_name or model_name_from_env())
    prompt = _as_chat_prompt(tokenizer, prompt_text)
    for chunk in stream_generate(model, tokenizer, prompt, max_tokens=max_tokens):
        text = chunk_text(chunk)
        if text:
            yield text

