"""
Privilege schemas - JSON shapes for rules, aliases and models.

Null fields are omitted on dump, so an allow rule without qualifiers is just
{"action": "read", "subject": "Post"}. Alias types dump as "subject",
"action" or "qualifier" and also load from their numeric form 0, 1 or 2.

Usage:
    schema = PrivilegeModelSchema.from_context(context)
    payload = schema.model_dump_json(exclude_none=True)

    context = PrivilegeModelSchema.model_validate_json(payload).to_context()
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .core.comparers import StringComparer
from .core.context import PrivilegeContext
from .core.models import PrivilegeAlias, PrivilegeMatch, PrivilegeModel, PrivilegeRule


class PrivilegeRuleSchema(BaseModel):
    """Rule schema."""
    model_config = ConfigDict(from_attributes=True)

    action: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    qualifiers: list[str] | None = None
    denied: bool | None = None

    @field_validator("action", "subject")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("cannot be whitespace")
        return v

    @classmethod
    def from_rule(cls, rule: PrivilegeRule) -> "PrivilegeRuleSchema":
        return cls(
            action=rule.action,
            subject=rule.subject,
            qualifiers=list(rule.qualifiers) or None,
            denied=True if rule.denied else None,
        )

    def to_rule(self) -> PrivilegeRule:
        return PrivilegeRule(
            action=self.action,
            subject=self.subject,
            qualifiers=tuple(self.qualifiers or ()),
            denied=bool(self.denied),
        )


class PrivilegeAliasSchema(BaseModel):
    """Alias schema."""
    alias: str = Field(min_length=1)
    values: list[str] = Field(min_length=1)
    type: PrivilegeMatch = PrivilegeMatch.ACTION

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v):
        # Numeric form: 0 subject, 1 action, 2 qualifier
        if isinstance(v, int) and not isinstance(v, bool):
            members = list(PrivilegeMatch)
            if not 0 <= v < len(members):
                raise ValueError(f"type must be between 0 and {len(members) - 1}")
            return members[v]
        return v

    @classmethod
    def from_alias(cls, alias: PrivilegeAlias) -> "PrivilegeAliasSchema":
        return cls(alias=alias.alias, values=list(alias.values), type=alias.scope)

    def to_alias(self) -> PrivilegeAlias:
        return PrivilegeAlias(alias=self.alias, values=tuple(self.values), scope=self.type)


class PrivilegeModelSchema(BaseModel):
    """Rules and aliases in declaration order."""
    rules: list[PrivilegeRuleSchema] = Field(default_factory=list)
    aliases: list[PrivilegeAliasSchema] = Field(default_factory=list)

    @classmethod
    def from_model(cls, model: PrivilegeModel) -> "PrivilegeModelSchema":
        return cls(
            rules=[PrivilegeRuleSchema.from_rule(r) for r in model.rules],
            aliases=[PrivilegeAliasSchema.from_alias(a) for a in model.aliases],
        )

    @classmethod
    def from_context(cls, context: PrivilegeContext) -> "PrivilegeModelSchema":
        return cls.from_model(context.model)

    def to_model(self) -> PrivilegeModel:
        return PrivilegeModel(
            rules=tuple(r.to_rule() for r in self.rules),
            aliases=tuple(a.to_alias() for a in self.aliases),
        )

    def to_context(self, comparer: StringComparer | None = None) -> PrivilegeContext:
        return PrivilegeContext.from_model(self.to_model(), comparer)
