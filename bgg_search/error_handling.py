"""
Common error handling utilities for the BGG search package.
"""

import logging
from typing import Optional, Any, Callable, Tuple, Type
from functools import wraps

from .errors import StorageError

logger = logging.getLogger(__name__)


def handle_errors(default_return: Any = None, log_error: bool = True,
                  exceptions: Tuple[Type[BaseException], ...] = (StorageError,)):
    """
    Decorator to turn the given exceptions into a default value, with logging.
    
    Args:
        default_return: Value to return on error
        log_error: Whether to log the error
        exceptions: Exception types to handle; anything else propagates
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except exceptions as e:
                if log_error:
                    logger.error(f"Error in {func.__name__}: {e}")
                return default_return
        return wrapper
    return decorator


def safe_execute(func: Callable, *args, default_return: Any = None,
                 error_msg: Optional[str] = None,
                 exceptions: Tuple[Type[BaseException], ...] = (StorageError,),
                 **kwargs) -> Any:
    """
    Execute a function, returning default_return if it raises one of `exceptions`.
    
    Args:
        func: Function to execute
        *args: Arguments for the function
        default_return: Value to return on error
        error_msg: Custom error message
        exceptions: Exception types to handle; anything else propagates
        **kwargs: Keyword arguments for the function
        
    Returns:
        Function result or default_return on error
    """
    try:
        return func(*args, **kwargs)
    except exceptions as e:
        if error_msg:
            logger.error(f"{error_msg}: {e}")
        else:
            logger.error(f"Error in {func.__name__}: {e}")
        return default_return
