"""Built-in provider definitions.

These entries are the base layer under any user configuration file. Providers
that publish an OpenAI-compatible ``/models`` endpoint get one; the rest run in
alias-only mode until an endpoint is configured.
"""

from typing import Any, Dict

DEFAULT_PROVIDERS: Dict[str, Dict[str, Any]] = {
    "openai": {
        "url": "https://api.openai.com/v1/chat/completions",
        "modelsEndpoint": "https://api.openai.com/v1/models",
        "model": {"default": "gpt-4o-mini", "large": "gpt-4o", "small": "gpt-4o-mini"},
        "embeddings": {"default": "text-embedding-3-small", "large": "text-embedding-3-large"},
        "stream": True,
        "jsonMode": True,
    },
    "xai": {
        "url": "https://api.x.ai/v1/chat/completions",
        "modelsEndpoint": "https://api.x.ai/v1/models",
        "model": {"default": "grok-beta", "large": "grok-beta", "small": "grok-beta"},
        "stream": True,
        "jsonMode": False,
    },
    "deepseek": {
        "url": "https://api.deepseek.com/chat/completions",
        "modelsEndpoint": "https://api.deepseek.com/models",
        "model": {"default": "deepseek-chat", "large": "deepseek-reasoner"},
        "stream": True,
        "jsonMode": True,
    },
    "moonshot": {
        "url": "https://api.moonshot.cn/v1/chat/completions",
        "modelsEndpoint": "https://api.moonshot.cn/v1/models",
        "model": {
            "default": "moonshot-v1-8k",
            "large": "moonshot-v1-128k",
            "small": "moonshot-v1-8k",
        },
        "stream": True,
        "jsonMode": True,
    },
    "stepfun": {
        "url": "https://api.stepfun.com/v1/chat/completions",
        "modelsEndpoint": "https://api.stepfun.com/v1/models",
        "model": {"default": "step-1-8k", "large": "step-1-256k", "vision": "step-1v-8k"},
        "stream": True,
        "jsonMode": False,
    },
    "yi": {
        "url": "https://api.lingyiwanwu.com/v1/chat/completions",
        "modelsEndpoint": "https://api.lingyiwanwu.com/v1/models",
        "model": {"default": "yi-lightning", "large": "yi-large", "vision": "yi-vision"},
        "stream": True,
        "jsonMode": False,
    },
    "alibaba": {
        "url": "https://dashscope.aliyuncs.com/compatible-mode/v1/chat/completions",
        "model": {"default": "qwen-turbo", "large": "qwen-max", "small": "qwen-turbo"},
        "embeddings": {"default": "text-embedding-v2"},
        "stream": True,
        "jsonMode": True,
    },
    "baidu": {
        "url": "https://qianfan.baidubce.com/v2/chat/completions",
        "model": {"default": "ernie-speed-128k", "large": "ernie-4.0-8k"},
        "stream": True,
        "jsonMode": False,
    },
    "tencent": {
        "url": "https://api.hunyuan.cloud.tencent.com/v1/chat/completions",
        "model": {"default": "hunyuan-lite", "large": "hunyuan-pro"},
        "stream": True,
        "jsonMode": False,
    },
    "iflytek": {
        "url": "https://spark-api-open.xf-yun.com/v1/chat/completions",
        "model": {"default": "generalv3.5", "large": "4.0Ultra", "small": "lite"},
        "stream": True,
        "jsonMode": False,
    },
}

__all__ = ["DEFAULT_PROVIDERS"]
