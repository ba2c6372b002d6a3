from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel, to_pascal


class PartialUser(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: str = Field(alias="name")
    display_name: str
    id: int


class User(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: str = Field(alias="name")
    display_name: str
    id: int
    description: str = ""
    created: str
    is_banned: bool = False
    external_app_display_name: str | None = None
    has_verified_badge: bool = False


class UserId(BaseModel):
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)

    id: int


class UsernameHistoryEntry(BaseModel):
    name: str


class FetchManyRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    user_ids: list[int]
    exclude_banned_users: bool = False


class FindManyRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    usernames: list[str]
    exclude_banned_users: bool = False
