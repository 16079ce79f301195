import logging
import os
from logging.handlers import RotatingFileHandler


class Logger:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(Logger, cls).__new__(cls)
            cls._instance._setup_logger()
        return cls._instance

    def _setup_logger(self):
        self.logger = logging.getLogger('PiVPNClient')
        self.logger.setLevel(logging.INFO)

        log_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'logs')
        os.makedirs(log_dir, exist_ok=True)
        log_file = os.path.join(log_dir, 'pivpn_client.log')

        # Use RotatingFileHandler to limit log file size
        file_handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024,
                                           backupCount=3)
        formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(name)s:%(lineno)d - %(pathname)s - %(message)s')
        file_handler.setFormatter(formatter)

        self.logger.addHandler(file_handler)

    def get_logger(self):
        return self.logger

    def set_level(self, level):
        """Accepts a level name such as 'DEBUG' or a logging constant."""
        if isinstance(level, str):
            name = level
            level = logging.getLevelName(name.upper())
            if not isinstance(level, int):
                raise ValueError(f"Unknown log level: {name}")
        self.logger.setLevel(level)


logger = Logger().get_logger()
