"""Sonar Claim Extractor - turns LLM research answers into sourced claim tables.

This package asks an OpenRouter chat model (Perplexity Sonar family) to extract
atomic factual claims about a topic and recovers a clean, queryable dataset from
whatever text the model sends back.

Components:
- extraction: content recovery, structural validation, normalization
- retrieval: citation URL cleaning and domain resolution
- query: search index, stable sort, debounce, view snapshot
- pipeline: one-call processing of a model response
- llm: OpenRouter client and prompt templates
- store: API key storage
- rendering: terminal tables and CSV export
- main_cli: command line entry point
"""
