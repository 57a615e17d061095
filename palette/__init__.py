"""
Chef's Palette core package.

This package contains:
- models: Recipe, MealTime and request schemas
- prompts: Prompt builders and the structured-output schema
- clients: Generative model clients (Gemini)
- generation: The two-phase recipe/image pipeline
- events: JSONL lifecycle event log
- config: Environment configuration and logging setup
"""
