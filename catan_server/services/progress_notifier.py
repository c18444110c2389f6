# catan_server/services/progress_notifier.py

import queue
from typing import Any


class QueueProgressNotifier:
    """
    Уведомитель для ядра: кладет полезную нагрузку в очередь и сразу возвращается.
    Рассылкой (в комнату матча) занимается фоновый воркер.
    """

    def __init__(self, notification_queue: queue.Queue):
        self.notification_queue = notification_queue

    def notify(self, game_id: str, payload: Any) -> None:
        self.notification_queue.put_nowait({
            'event': payload.EVENT,
            'payload': payload.to_dict(),
            'room': game_id
        })
