import pytest

from llmcatalog.models.discovery import parsers
from llmcatalog.models.discovery.capabilities import detect_capabilities


def _caps(name):
    return detect_capabilities(name, streaming=True, json_mode=False)


def test_openai_compatible_keeps_native_order_and_fields():
    payload = {
        "object": "list",
        "data": [
            {"id": "gpt-4o", "object": "model", "created": 1715367049, "owned_by": "system"},
            {"id": "gpt-3.5-turbo", "object": "model", "owned_by": "openai"},
        ],
    }

    records = parsers.parse_openai_compatible(payload)

    assert [r.id for r in records] == ["gpt-4o", "gpt-3.5-turbo"]
    assert records[0].name == "gpt-4o"
    assert records[0].created == 1715367049
    assert records[0].owned_by == "system"


def test_openai_compatible_owner_override():
    records = parsers.parse_openai_compatible({"data": [{"id": "grok-beta"}]}, owner="xai")

    assert records[0].owned_by == "xai"


def test_entries_without_identifier_are_skipped():
    payload = {"data": [{"object": "model"}, "not-a-dict", {"id": "kept"}]}

    assert [r.id for r in parsers.parse_openai_compatible(payload)] == ["kept"]


@pytest.mark.parametrize(
    "parser",
    [
        parsers.parse_openai_compatible,
        parsers.parse_alibaba,
        parsers.parse_baidu,
        parsers.parse_tencent,
        parsers.parse_coze,
        parsers.parse_minimax,
        parsers.parse_baichuan,
        parsers.parse_bytedance,
        parsers.parse_iflytek,
    ],
)
@pytest.mark.parametrize("payload", [None, [], "text", {"unexpected": True}, {"data": {}}])
def test_unrecognized_shapes_yield_empty_list(parser, payload):
    assert parser(payload) == []


def test_alibaba_reads_output_models():
    payload = {"output": {"models": [{"model_id": "qwen-max", "model_name": "Qwen Max"}]}}

    records = parsers.parse_alibaba(payload)

    assert records[0].id == "qwen-max"
    assert records[0].name == "Qwen Max"
    assert records[0].owned_by == "alibaba"


def test_baidu_reads_result_data():
    records = parsers.parse_baidu({"result": {"data": [{"name": "ernie-4.0-8k"}]}})

    assert [r.id for r in records] == ["ernie-4.0-8k"]


def test_tencent_reads_response_envelope():
    payload = {"Response": {"Models": [{"ModelId": "hunyuan-pro", "ModelName": "Hunyuan Pro"}]}}

    records = parsers.parse_tencent(payload)

    assert records[0].id == "hunyuan-pro"
    assert records[0].name == "Hunyuan Pro"


def test_coze_lists_bots():
    records = parsers.parse_coze({"data": [{"bot_id": "7350", "bot_name": "Helper"}]})

    assert records[0].id == "7350"
    assert records[0].name == "Helper"


def test_iflytek_chat_answer_yields_spark_domains():
    payload = {"payload": {"choices": {"text": [{"content": "hi"}]}}}

    records = parsers.parse_iflytek(payload)

    assert [r.id for r in records] == [f"spark-{d}" for d in parsers.IFLYTEK_DOMAINS]


def test_stepfun_vision_models():
    assert parsers.enrich_stepfun("step-1v-8k", _caps("step-1v-8k")).vision is True
    assert parsers.enrich_stepfun("step-1-8k", _caps("step-1-8k")).vision is False


def test_bytedance_doubao_vision():
    name = "doubao-vision-pro"
    assert parsers.enrich_bytedance(name, _caps(name)).vision is True


def test_yi_vision_and_large_context():
    caps = parsers.enrich_yi("yi-vl-plus", _caps("yi-vl-plus"))
    large = parsers.enrich_yi("yi-large", _caps("yi-large"))

    assert caps.vision is True
    assert "large_context" in large.extras


def test_xai_grok_realtime_data():
    assert parsers.enrich_xai("grok-beta", _caps("grok-beta")).extras == ("realtime_data",)


def test_coze_bots_are_conversational():
    assert "conversational" in parsers.enrich_coze("Helper", _caps("Helper")).extras


def test_minimax_embo_is_embedding_model():
    caps = parsers.enrich_minimax("abab-embo-01", _caps("abab-embo-01"))

    assert caps.embeddings is True
    assert caps.chat is False


def test_iflytek_spark_gets_speech_tag_not_audio():
    caps = parsers.enrich_iflytek("Spark generalv3", _caps("Spark generalv3"))

    assert caps.chat is True
    assert caps.audio is False
    assert "speech" in caps.extras
