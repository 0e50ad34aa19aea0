"""
Prover Logger Module

This module provides structured logging for tournament requests, server
responses, tournament events and external tool runs. Tournament secrets are
never written to the log.
"""

import logging
import json
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

from ..config.app_config import Config

# Response fields that reveal the solution; the word list is public, so the index does too
SECRET_FIELDS = ('salt', 'solution', 'solutionPacked', 'wordIndex', 'solutionIndex')


class ProverLogger:
    """
    Centralized logging system for the tournament prover server.

    Features:
    - Request tracking with client IP
    - Server response logging with secret masking
    - Tournament event logging
    - JSON structured logs for easy parsing
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = getattr(logging, str(level).upper(), logging.INFO)

        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        """Setup the prover logger with file and console handlers."""
        logger = logging.getLogger('tweetle_prover')
        logger.setLevel(self.level)

        # Prevent duplicate handlers
        if logger.handlers:
            logger.handlers.clear()

        log_file = self.log_dir / f"prover_log_{datetime.now().strftime('%Y-%m-%d')}.log"

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(self.level)

        # Console only shows warnings and errors
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)

        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        return logger

    def _get_client_identity(self, request) -> Dict[str, str]:
        return {'client_ip': getattr(request, 'remote_addr', None) or 'unknown'}

    def _create_log_entry(self,
                          event_type: str,
                          action: str,
                          client_info: Dict[str, str],
                          details: Dict[str, Any]) -> str:
        """Create a structured log entry."""
        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'client': client_info,
            'details': details
        }
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def log_user_action(self,
                        request,
                        action: str,
                        tournament_id: Optional[int] = None,
                        **kwargs):
        """
        Log an incoming request.

        Args:
            request: Flask request object
            action: Type of action (e.g., 'create', 'register', 'prove', 'reveal')
            tournament_id: Tournament identifier if applicable
            **kwargs: Additional details to log
        """
        details = {
            'tournament_id': tournament_id,
            'endpoint': request.endpoint,
            'method': request.method,
            'url': request.url,
            **kwargs
        }

        log_message = self._create_log_entry('USER_ACTION', action, self._get_client_identity(request), details)
        self.logger.info(log_message)

    def log_server_response(self,
                            request,
                            action: str,
                            success: bool,
                            response_data: Dict[str, Any],
                            tournament_id: Optional[int] = None,
                            **kwargs):
        """
        Log a server response with secrets masked.

        Args:
            request: Flask request object
            action: Action that was performed
            success: Whether the action succeeded
            response_data: Data being returned to client
            tournament_id: Tournament identifier if applicable
            **kwargs: Additional details to log
        """
        details = {
            'tournament_id': tournament_id,
            'success': success,
            'response_size': len(str(response_data)),
            'response_data': self._sanitize_response_data(response_data),
            **kwargs
        }

        event_type = 'SERVER_RESPONSE_SUCCESS' if success else 'SERVER_RESPONSE_ERROR'
        log_message = self._create_log_entry(event_type, action, self._get_client_identity(request), details)

        if success:
            self.logger.info(log_message)
        else:
            self.logger.error(log_message)

    def log_tournament_event(self,
                             tournament_id: Optional[int],
                             event: str,
                             **kwargs):
        """
        Log tournament lifecycle events (created, registered, proved, revealed).

        Args:
            tournament_id: Tournament identifier, None before registration
            event: Type of event
            **kwargs: Additional event details (never secrets)
        """
        details = {
            'tournament_id': tournament_id,
            **kwargs
        }

        log_message = self._create_log_entry('TOURNAMENT_EVENT', event, {'client_ip': 'system'}, details)
        self.logger.info(log_message)

    def log_error(self,
                  request,
                  error: Exception,
                  action: str,
                  tournament_id: Optional[int] = None):
        """
        Log errors with full context.

        Args:
            request: Flask request object
            error: Exception that occurred
            action: Action that was being performed
            tournament_id: Tournament identifier if applicable
        """
        details = {
            'tournament_id': tournament_id,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'action': action
        }
        stage = getattr(error, 'stage', None)
        if stage:
            details['stage'] = stage

        log_message = self._create_log_entry('ERROR', action, self._get_client_identity(request), details)
        self.logger.error(log_message)

    def _sanitize_response_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Mask secrets and shrink large fields before logging."""
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        sanitized = data.copy()

        for field in SECRET_FIELDS:
            if field in sanitized:
                sanitized[field] = '***'

        # Calldata runs to thousands of felts; only its length is useful in the log
        if isinstance(sanitized.get('calldata'), list):
            sanitized['calldata'] = {'length': len(sanitized['calldata'])}

        if isinstance(sanitized.get('output'), str) and len(sanitized['output']) > 2000:
            sanitized['output'] = sanitized['output'][:2000] + '...'

        return sanitized


# Global logger instance
prover_logger = ProverLogger(Config.LOG_DIR, Config.LOG_LEVEL)
