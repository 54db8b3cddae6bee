"""Result types produced by the function-call parser.

A parsed reply is exactly one of:

- ``ParseFailure``: the text was not a usable function call at all.
- ``UnknownFunction``: a well-formed call naming a function we do not offer.
- ``LogTransactionCall`` / ``ReadTransactionsCall``: a recognized call.

Parameter values on recognized calls are kept exactly as the model sent
them; defaulting and validation happen in the dispatcher.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

LOG_TRANSACTION = "LogTransaction"
READ_TRANSACTIONS = "ReadTransactions"

KNOWN_FUNCTIONS = (LOG_TRANSACTION, READ_TRANSACTIONS)


class FunctionCall(BaseModel):
    """Shape of the JSON envelope the model is instructed to emit."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(validation_alias=AliasChoices("name", "function"))
    parameters: Dict[str, Any] = Field(default_factory=dict)


@dataclass
class ParseFailure:
    reason: str


@dataclass
class UnknownFunction:
    name: str
    parameters: Dict[str, Any] = field(default_factory=dict)


@dataclass
class LogTransactionCall:
    amount: Any = None
    category: Any = None
    description: Any = None
    date: Any = None


@dataclass
class ReadTransactionsCall:
    pass


ParsedIntent = Union[
    ParseFailure, UnknownFunction, LogTransactionCall, ReadTransactionsCall
]
