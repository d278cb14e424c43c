from formulator.utils.logger import setup_logger, JsonFormatter

__all__ = ['setup_logger', 'JsonFormatter']
