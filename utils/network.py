"""
Модуль: `utils/network.py`.
Назначение: Определение адреса машины в локальной сети для стартового сообщения.
"""

import socket


def get_network_ip() -> str:
    """Возвращает первый не-loopback IPv4 адрес или `localhost`."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        # UDP connect не отправляет пакетов, только выбирает исходящий интерфейс
        sock.connect(("10.255.255.255", 1))
        address = sock.getsockname()[0]
    except OSError:
        return "localhost"
    finally:
        sock.close()

    if not address or address.startswith("127."):
        return "localhost"
    return address


def build_startup_urls(host: str, port: int) -> dict[str, str]:
    """Адреса для стартового баннера: локальный, сетевой и админ-панели."""
    network_host = get_network_ip() if host in {"0.0.0.0", ""} else host
    return {
        "local": f"http://localhost:{port}",
        "network": f"http://{network_host}:{port}",
        "admin": f"http://{network_host}:{port}/admin",
    }
