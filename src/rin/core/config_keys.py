"""配置键规则：敏感字段与分组."""

from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Any

MASK = "••••••••"

AI_SUMMARY_GROUP = "ai_summary"


@dataclass(frozen=True)
class ConfigKeyRule:
    """配置键规则，pattern 为 shell 风格通配符."""

    pattern: str
    sensitive: bool = False
    group: str | None = None


# 按顺序匹配，第一条命中的规则生效
CONFIG_KEY_RULES: tuple[ConfigKeyRule, ...] = (
    ConfigKeyRule("ai_summary.api_key", sensitive=True, group=AI_SUMMARY_GROUP),
    ConfigKeyRule("ai_summary.*", group=AI_SUMMARY_GROUP),
    ConfigKeyRule("*api_key", sensitive=True),
    ConfigKeyRule("*secret*", sensitive=True),
    ConfigKeyRule("*password*", sensitive=True),
)

_DEFAULT_RULE = ConfigKeyRule("*")


def rule_for(key: str) -> ConfigKeyRule:
    for rule in CONFIG_KEY_RULES:
        if fnmatchcase(key, rule.pattern):
            return rule
    return _DEFAULT_RULE


def is_sensitive(key: str) -> bool:
    return rule_for(key).sensitive


def mask_sensitive(config: dict[str, Any]) -> dict[str, Any]:
    """返回副本，敏感且非空的值替换为掩码."""
    return {
        key: MASK if value and is_sensitive(key) else value
        for key, value in config.items()
    }


def split_groups(
    config: dict[str, Any],
) -> tuple[dict[str, Any], dict[str, dict[str, Any]]]:
    """
    拆分配置.

    返回：(未分组的键值, {分组名: 该分组的键值})
    """
    plain: dict[str, Any] = {}
    groups: dict[str, dict[str, Any]] = {}
    for key, value in config.items():
        group = rule_for(key).group
        if group is None:
            plain[key] = value
        else:
            groups.setdefault(group, {})[key] = value
    return plain, groups
