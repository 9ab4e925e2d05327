"""Conversation thread models"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Annotated

from .payloads import AnalysisContent, CalculationPayload, DocumentPayload, TextContent

MessageContent = Annotated[
    Union[TextContent, AnalysisContent, CalculationPayload, DocumentPayload],
    Field(discriminator='kind'),
]


class ConversationMessage(BaseModel):
    """One message of a session thread (append-only, owned by the caller)"""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = Field(default_factory=datetime.now)
    author: Literal['user', 'ai']
    is_typing: bool = Field(default=False, description="AI slot still receiving streamed text")
    is_placeholder: bool = Field(default=False, description="Synthetic greeting, never sent as history")
    content: MessageContent = Field(default_factory=TextContent)

    @classmethod
    def user(cls, text: str) -> 'ConversationMessage':
        return cls(author='user', content=TextContent(text=text))

    @classmethod
    def ai(cls, text: str = '', is_typing: bool = False) -> 'ConversationMessage':
        return cls(author='ai', is_typing=is_typing, content=TextContent(text=text))

    @classmethod
    def placeholder(cls, text: str) -> 'ConversationMessage':
        return cls(author='ai', is_placeholder=True, content=TextContent(text=text))

    def complete(self, text: str | None = None) -> 'ConversationMessage':
        """Return the finished copy of a typing slot (is_typing true -> false)"""
        update: dict = {'is_typing': False}
        if text is not None and isinstance(self.content, TextContent):
            update['content'] = TextContent(text=text)
        return self.model_copy(update=update)


class HistoryTurn(BaseModel):
    """Serialized turn sent to the generation client"""
    model_config = ConfigDict(frozen=True)

    role: Literal['user', 'model']
    text: str
