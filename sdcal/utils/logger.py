import sys
from pathlib import Path
from datetime import datetime

class ConsoleLogger:
    """
    Tee for stdout: every report line goes to the console and a log file
    """
    def __init__(self, log_file=None, prefix="sdcal"):
        self.terminal = sys.stdout
        if log_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = f"{prefix}_log_{timestamp}.txt"
        self.log_file = Path(log_file)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        self.file = open(self.log_file, 'w', encoding='utf-8')

    def write(self, message):
        self.terminal.write(message)
        self.file.write(message)
        self.file.flush()

    def flush(self):
        self.terminal.flush()
        self.file.flush()

    def close(self):
        if not self.file.closed:
            self.file.close()

    def __enter__(self):
        sys.stdout = self
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        sys.stdout = self.terminal
        self.close()

def start_logging(log_file=None, prefix="sdcal"):
    """Start teeing console output to a log file"""
    logger = ConsoleLogger(log_file, prefix=prefix)
    sys.stdout = logger
    return logger

def stop_logging(logger):
    """Restore normal console output and close the log file"""
    sys.stdout = logger.terminal
    logger.close()
    print(f"\nLog saved to: {logger.log_file}")
