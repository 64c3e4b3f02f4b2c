"""インサイト生成用プロンプトの組み立て。"""

from energyquiz.config import ServerConfig
from energyquiz.models.insights import InsightRequest

_RESPONSE_SHAPE = (
    "Respond with a single JSON object of the form "
    '{"nameVibration": {"number": <int>, "description": <string>}, '
    '"energyType": {"name": <string>, "description": <string>}, '
    '"insights": [<string>, ...], "message": <string>}.'
)

_UPSELL_INSTRUCTION = (
    "Based on this information, provide a personalized insight that goes deeper than what's already "
    "shown in the results card. Include subtle hints at pain points that our premium services could "
    "address without explicitly mentioning the upsell."
)


def _directives(config: ServerConfig) -> list[str]:
    values = [
        config.gemini_instruction_style,
        config.gemini_response_tone,
        config.gemini_response_format,
        config.gemini_output_strategy,
        config.gemini_integration_rule,
    ]
    return [v.strip() for v in values if v.strip()]


def build_insight_prompt(request: InsightRequest, config: ServerConfig) -> str:
    """設定済みの指示とクイズ結果からプロンプトを組み立てる。"""
    answers = "\n".join(f"{question_id}: {value}" for question_id, value in request.answers.items())
    sections = [
        *_directives(config),
        _RESPONSE_SHAPE,
        "Here is the data to work with:",
        f"NAME: {request.name}",
        (
            "NAME VIBRATION:\n"
            f"Number: {request.name_vibration.number}\n"
            f"Description: {request.name_vibration.description}"
        ),
        f"ENERGY TYPE:\nType: {request.energy_type.name}\nDescription: {request.energy_type.description}",
        f"QUESTIONNAIRE RESPONSES:\n{answers}",
        _UPSELL_INSTRUCTION,
    ]
    return "\n\n".join(sections)
