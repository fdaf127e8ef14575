"""CLI entry point for F5AI LLM SDK."""

import argparse
import asyncio
from typing import List, Optional

from .core import get_available_models
from .models.conversation_types import ChatMessage
from .models.generation import CompletionOptions
from .providers import F5AIProvider, ProviderError


async def chat(model: str, prompt: str, system: Optional[str] = None,
               max_tokens: Optional[int] = None, temperature: Optional[float] = None,
               stream: bool = False):
    """Send one prompt to the specified model."""
    messages = []
    if system:
        messages.append(ChatMessage(role="system", content=system))
    messages.append(ChatMessage(role="user", content=prompt))
    options = CompletionOptions(model=model, max_tokens=max_tokens, temperature=temperature)

    async with F5AIProvider() as provider:
        if stream:
            async for message in provider.stream_chat(messages, options):
                print(message.content or "", end='', flush=True)
            print()
        else:
            reply = await provider.chat(messages, options)
            print(f"Response from {model}:\n")
            print(reply.content)
            if reply.tool_calls:
                print(f"\nTool calls: {reply.tool_calls}")


async def fim(model: str, prefix: str, suffix: str, max_tokens: Optional[int] = None):
    """Fill in the middle between prefix and suffix."""
    options = CompletionOptions(model=model, max_tokens=max_tokens)
    async with F5AIProvider() as provider:
        async for fragment in provider.stream_fim(prefix, suffix, options):
            print(fragment, end='', flush=True)
        print()


async def embed(texts: List[str], model: Optional[str] = None):
    """Print the dimension and head of each embedding."""
    async with F5AIProvider() as provider:
        vectors = await provider.embed(texts, model=model)
    for text, vector in zip(texts, vectors):
        head = ", ".join(f"{value:.4f}" for value in vector[:4])
        print(f"{text!r}: dim={len(vector)} [{head}, ...]")


async def list_models():
    """List models served by the backend."""
    async with F5AIProvider() as provider:
        models = await provider.list_models()

    print("Backend Models:")
    print("-" * 50)
    for model in models:
        print(model)


def show_catalog():
    """Print the static model catalog."""
    print("Model Catalog:")
    print("-" * 50)
    for config in get_available_models().values():
        print(f"{config.name} ({config.family.value})")
        if config.description:
            print(f"   {config.description}")
        if config.context_length:
            print(f"   Context: {config.context_length} tokens")
        if config.max_completion_tokens:
            print(f"   Max completion: {config.max_completion_tokens} tokens")
        print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="F5AI LLM SDK CLI")
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Chat command
    chat_parser = subparsers.add_parser('chat', help='Send a chat prompt')
    chat_parser.add_argument('model', help='Model id (e.g., "o1-mini")')
    chat_parser.add_argument('prompt', help='User prompt')
    chat_parser.add_argument('--system', help='System message')
    chat_parser.add_argument('--max-tokens', type=int, help='Maximum tokens to generate')
    chat_parser.add_argument('--temperature', type=float, help='Temperature (0.0-2.0)')
    chat_parser.add_argument('--stream', action='store_true', help='Print fragments as they arrive')

    # FIM command
    fim_parser = subparsers.add_parser('fim', help='Fill in the middle')
    fim_parser.add_argument('model', help='Model id')
    fim_parser.add_argument('prefix', help='Text before the gap')
    fim_parser.add_argument('suffix', help='Text after the gap')
    fim_parser.add_argument('--max-tokens', type=int, help='Maximum tokens to generate')

    # Embed command
    embed_parser = subparsers.add_parser('embed', help='Embed one or more texts')
    embed_parser.add_argument('texts', nargs='+', help='Texts to embed')
    embed_parser.add_argument('--model', help='Embedding model')

    subparsers.add_parser('list-models', help='List models served by the backend')
    subparsers.add_parser('catalog', help='Show the static model catalog')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == 'chat':
            asyncio.run(chat(
                args.model,
                args.prompt,
                args.system,
                args.max_tokens,
                args.temperature,
                args.stream
            ))
        elif args.command == 'fim':
            asyncio.run(fim(args.model, args.prefix, args.suffix, args.max_tokens))
        elif args.command == 'embed':
            asyncio.run(embed(args.texts, args.model))
        elif args.command == 'list-models':
            asyncio.run(list_models())
        elif args.command == 'catalog':
            show_catalog()
        else:
            parser.print_help()
    except ProviderError as e:
        print(f"Error: {e.message}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
