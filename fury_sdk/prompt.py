import asyncio
from typing import Dict, List, Optional

from loguru import logger


def is_yes(answer: str) -> bool:
    return answer in ('Y', 'y')


def is_no(answer: str) -> bool:
    return answer in ('N', 'n')


class Prompter:
    """Asks the operator questions on stdin, or answers them from `answers`.

    With pre-supplied answers nothing is read from stdin; a question with no
    pre-supplied answer gets the empty answer, i.e. the default "N".
    """

    def __init__(self, answers: Optional[Dict[str, str]] = None):
        self.answers = answers
        self.asked: List[str] = []

    async def ask(self, key: str, question: str) -> str:
        self.asked.append(key)
        if self.answers is not None:
            answer = self.answers.get(key, '')
            logger.info(f"{question}{answer}")
            return answer
        answer = await asyncio.to_thread(input, question)
        return answer.strip()
