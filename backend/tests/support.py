import os
from unittest.mock import patch

from core.config import Config

MOCK_ENV = {
    'FLASK_ENV': 'test',
    'USE_MOCK_SHEETS': 'true',
}


def make_config(**overrides) -> Config:
    """Build a Config from a clean environment plus overrides."""
    env = dict(MOCK_ENV)
    env.update(overrides)
    with patch.dict(os.environ, env, clear=True):
        return Config()


def valid_registration(**overrides):
    data = {
        'studentName': 'John Doe',
        'teacher': 'Mrs. Smith',
        'projectName': 'Volcano Experiment',
        'parentGuardianName': 'Jane Doe',
        'parentGuardianEmail': 'jane@example.com',
        'consentGiven': True,
    }
    data.update(overrides)
    return data
