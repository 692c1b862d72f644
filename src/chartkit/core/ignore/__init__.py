"""Regras de exclusão para leitura de diretórios."""

from .rules import HELMIGNORE, IgnoreRules  # noqa: F401
