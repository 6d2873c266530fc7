import json
from typing import Optional

from krishi_setu.core.genai_client import build_structured_chain, genai_http_error
from krishi_setu.core.languages import language_name
from krishi_setu.models.advisory import AgriQaResponse
from krishi_setu.prompts.agri_qa_system_prompt import AGRI_QA_SYSTEM_PROMPT


async def answer_question(question: str, language: Optional[str] = None) -> AgriQaResponse:
    chain = build_structured_chain(AgriQaResponse)
    input_data = {"question": question, "language": language_name(language)}
    try:
        return await chain.ainvoke(
            {"system_prompt": AGRI_QA_SYSTEM_PROMPT, "input_json": json.dumps(input_data)}
        )
    except Exception as e:
        raise genai_http_error(e, "answer the question") from e
