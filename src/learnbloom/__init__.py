"""Learn Bloom client failure handling.

Classifies backend and transport failures into a closed taxonomy, retries
fallible async operations, and turns the result into user-facing toasts and
structured diagnostic records.
"""

__version__ = "0.3.0"
