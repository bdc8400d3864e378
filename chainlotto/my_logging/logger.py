import datetime
import json
import logging.config
import os
from typing import Dict, Optional

from chainlotto.config import cfg
from chainlotto.my_logging.log_context import full_log_context

# Timestamp of this process, shared by all log files it writes
timestamp = f'{datetime.datetime.now():%Y-%m-%d_%H-%M-%S}'

# Measurements (gas, timings) are logged below DEBUG and only end up in the data log
DATA = 5
logging.addLevelName(DATA, 'DATA')


def data(key: str, value):
    """Write a measurement to the data log, tagged with the current log context."""
    logging.log(DATA, key, extra={'data_value': value, 'data_context': list(full_log_context)})


class OnlyData(logging.Filter):
    def filter(self, record):
        return record.levelno == DATA


class DataFormatter(logging.Formatter):
    """Format DATA records as one JSON object per line."""

    def format(self, record):
        return json.dumps({
            'key': record.getMessage(),
            'value': getattr(record, 'data_value', None),
            'context': getattr(record, 'data_context', []),
        }, default=str)


def shutdown(handler_list=None):
    logging.shutdown([] if handler_list is None else handler_list)


def get_log_dir(parent_dir: str, label: str) -> str:
    d = os.path.join(parent_dir, label)
    os.makedirs(d, exist_ok=True)
    return d


def get_log_file(label: Optional[str] = 'default', parent_dir: Optional[str] = None, filename: str = 'log',
                 include_timestamp: bool = True) -> str:
    """
    Return the path prefix for a set of log files.

    The files are placed in <parent_dir>/<label> (parent_dir defaults to cfg.log_dir, no subdirectory if label is None).
    """
    parent_dir = os.path.realpath(cfg.log_dir) if parent_dir is None else parent_dir
    if label is None:
        os.makedirs(parent_dir, exist_ok=True)
        log_dir = parent_dir
    else:
        log_dir = get_log_dir(parent_dir, label)

    if include_timestamp:
        filename = f'{filename}_{timestamp}'
    return os.path.join(log_dir, filename)


def _file_handler(log_file: str, suffix: str, level: str, formatter: str, **kwargs) -> Dict:
    return {
        'class': 'logging.FileHandler',
        'filename': f'{log_file}_{suffix}.log',
        'mode': 'w',
        'level': level,
        'formatter': formatter,
        **kwargs
    }


def prepare_logger(log_file: Optional[str] = None, silent=True):
    """
    (Re-)configure the root logger.

    Warnings and errors always go to the console. If log_file is given, info, debug and data records are additionally
    written to <log_file>_info.log, <log_file>_debug.log and <log_file>_data.log.
    """
    shutdown()
    if log_file is not None and not silent:
        print(f'Saving logs to {log_file}*...')

    handlers = {
        'console': {
            'class': 'logging.StreamHandler',
            'level': 'WARNING',
            'formatter': 'standard',
        }
    }
    if log_file is not None:
        handlers['fileinfo'] = _file_handler(log_file, 'info', 'INFO', 'standard')
        handlers['filedebug'] = _file_handler(log_file, 'debug', 'DEBUG', 'standard')
        handlers['filedata'] = _file_handler(log_file, 'data', 'DATA', 'data', filters=['onlydata'])

    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s]: %(message)s',
                'datefmt': '%Y-%m-%d_%H-%M-%S'
            },
            'data': {
                '()': DataFormatter
            },
        },
        'filters': {
            'onlydata': {
                '()': OnlyData
            }
        },
        'handlers': handlers,
        'loggers': {
            '': {
                'handlers': list(handlers),
                'level': DATA
            }
        }
    })


# Console-only logging until prepare_logger is called with a log file
prepare_logger()
