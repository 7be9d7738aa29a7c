# Gunicorn configuration

# Количество воркеров: 2 * CPU + 1 для небольшого VPS
workers = 4

# 2 потока на воркер для лучшей обработки I/O
threads = 2

# Адрес и порт
bind = "0.0.0.0:8000"

# Тип воркера - gthread для поддержки threads
worker_class = "gthread"

# Таймауты
timeout = 60
graceful_timeout = 30
keepalive = 5

# Защита от memory leaks
max_requests = 1000
max_requests_jitter = 100

# Логирование
accesslog = "-"
errorlog = "-"
loglevel = "info"

# Перезагрузка при изменении кода (только для dev)
reload = False

# Имя процесса для мониторинга
proc_name = "lms-gunicorn"

wsgi_app = "core.wsgi:application"


def post_worker_init(worker):
    """Прогреваем подключение к БД и ORM в каждом воркере"""
    from core.warmup import warmup
    warmup()
