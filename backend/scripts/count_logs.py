import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)) + '/..')

from repo_stress_logs import StressLogRepo
from settings import settings

counts = StressLogRepo(settings.db_path).count_by_user()
for user_id, n in counts.items():
    print(f'{user_id}: {n}')
print('total rows:', sum(counts.values()))
