import threading

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

# Все изменяющие операции (запись + пересчёт итоговых оценок) выполняются под этим замком.
write_lock = threading.RLock()
