# Copyright 2025 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Example message schemas.

A small playback-command model: a ``Foo`` envelope with nested objects, a list,
an optional bounded ``age`` and a list of polymorphic ``Message`` values
discriminated by ``@td-type``.
"""

from .models.discriminators import DiscriminatorTable
from .models.schema import (
    BOOLEAN,
    INTEGER,
    STRING,
    EnumType,
    ListType,
    ObjectSchema,
    PolymorphicType,
    ValidatorSpec,
    declare_field,
)

MESSAGE_DISCRIMINATOR_KEY = "@td-type"

FOO_BAR = ObjectSchema(
    name="FooBar",
    fields=[
        declare_field("list", ListType(INTEGER)),
    ],
)

BAR = ObjectSchema(
    name="Bar",
    fields=[
        declare_field("name", STRING),
        declare_field("foo", FOO_BAR),
    ],
)

LANGUAGE = EnumType.of(
    "Language",
    properties={"code": STRING},
    constants={
        "EN_US": {"code": "en-US"},
        "EN_UK": {"code": "en-UK"},
        "PT_PT": {"code": "pt-PT"},
    },
)

TALKDESK_RESOURCES = EnumType.of(
    "TalkdeskResources",
    properties={"code": STRING},
    constants={"ASSET": {"code": "asset"}},
)

ASSET_REFERENCE = ObjectSchema(
    name="AssetReference",
    fields=[
        declare_field("id", STRING),
        declare_field("type", TALKDESK_RESOURCES),
    ],
)

TEXT_MESSAGE = ObjectSchema(
    name="TextMessage",
    fields=[
        declare_field("text", STRING),
        declare_field("language", LANGUAGE),
    ],
)

URL_MESSAGE = ObjectSchema(
    name="UrlMessage",
    fields=[
        declare_field("url", STRING),
    ],
)

MESSAGE_TYPES = DiscriminatorTable(
    {
        "com.nunomorais.examples.TextMessage": TEXT_MESSAGE,
        "com.nunomorais.examples.UrlMessage": URL_MESSAGE,
    }
)

MESSAGE = PolymorphicType(
    name="Message",
    resolver=MESSAGE_TYPES,
    discriminator_key=MESSAGE_DISCRIMINATOR_KEY,
)

PLAY_AUDIO = ObjectSchema(
    name="PlayAudio",
    fields=[
        declare_field("message", MESSAGE),
    ],
)

FOO = ObjectSchema(
    name="Foo",
    fields=[
        declare_field("age", INTEGER, nullable=True, validators=[ValidatorSpec.of("min_value", 5)]),
        declare_field("bar", BAR),
        declare_field("bool", BOOLEAN),
        declare_field("messages", ListType(MESSAGE)),
    ],
)
