import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)) + '/..')

from repo_stress_logs import StressLogRepo
from settings import settings

print('Opening', settings.db_path)
StressLogRepo(settings.db_path).create_table()
print('DDL applied')
