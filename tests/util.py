import os

DATA_DIR = os.path.join(os.path.dirname(__file__), 'data')
SNAPSHOT_FILE = os.path.join(DATA_DIR, 'snapshot.json')


def get_data(*paths):
    return os.path.join(DATA_DIR, *paths)
