# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 studyplanner contributors

import typing

from frozendict import frozendict
from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema


# Validate frozendict fields as plain dicts, then freeze them
class PydanticFrozenDictAnnotation:
    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: typing.Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        args = typing.get_args(source_type) or (typing.Any, typing.Any)

        schema = core_schema.chain_schema(
            [
                handler.generate_schema(dict[args[0], args[1]]),
                core_schema.no_info_plain_validator_function(frozendict),
            ]
        )
        return core_schema.json_or_python_schema(
            json_schema=schema,
            python_schema=schema,
            serialization=core_schema.plain_serializer_function_ser_schema(dict),
        )


_K = typing.TypeVar("_K")
_V = typing.TypeVar("_V")
FrozenDict = typing.Annotated[frozendict[_K, _V], PydanticFrozenDictAnnotation]
