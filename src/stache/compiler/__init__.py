"""Stache compiler: template tokens to TemplateAST."""

from stache.compiler.core import TemplateASTResolver, TemplateCompiler, compile_tokens
from stache.compiler.scope import CompilationState, Scope, ScopeKind

__all__ = [
    "CompilationState",
    "Scope",
    "ScopeKind",
    "TemplateASTResolver",
    "TemplateCompiler",
    "compile_tokens",
]
