# ======================== IMPORTS ========================
import redis
from typing import Any, List, Tuple

DELETE_CHUNK_SIZE: int = 1000 # Keys per DEL command


# ======================== CLASSES ========================
class WriteBatch:
    """
    Ordered list of pending write commands, committed as a single MULTI/EXEC block.
    Either every queued command is applied or, if the batch is rejected before EXEC, none is.

    Sample usage:
        batch = WriteBatch(client)
        batch.hset("TermCounter:A", mapping={"the": "5"}).sadd("URLSet:the", "A")
        batch.commit()
    """
    def __init__(self, client: redis.Redis) -> None:
        self.client = client
        self.commands: List[Tuple[str, tuple, dict]] = []

    def __len__(self) -> int:
        return len(self.commands)

    def hset(self, key: str, field: str | None=None, value: str | None=None, mapping: dict | None=None) -> "WriteBatch":
        self.commands.append(("hset", (key, field, value), {"mapping": mapping}))
        return self

    def sadd(self, key: str, *members: str) -> "WriteBatch":
        self.commands.append(("sadd", (key, *members), {}))
        return self

    def srem(self, key: str, *members: str) -> "WriteBatch":
        self.commands.append(("srem", (key, *members), {}))
        return self

    def delete(self, *keys: str) -> "WriteBatch":
        keys = list(keys)
        for i in range(0, len(keys), DELETE_CHUNK_SIZE):
            self.commands.append(("delete", tuple(keys[i:i + DELETE_CHUNK_SIZE]), {}))
        return self

    def commit(self, pipe: redis.client.Pipeline | None=None) -> List[Any]:
        """
        About:
        ------
            Sends every queued command inside one transaction and clears the batch.

        Args:
        -----
            pipe: Optional pipeline that is already WATCHing keys. It is switched to MULTI mode here,
                  so the EXEC fails with WatchError if a watched key changed in the meantime.

        Returns:
        --------
            The per-command replies from EXEC.
        """
        if pipe is None:
            if not self.commands:
                return []
            with self.client.pipeline(transaction=True) as pipe:
                return self._execute(pipe)

        pipe.multi()
        return self._execute(pipe)

    def _execute(self, pipe: redis.client.Pipeline) -> List[Any]:
        for name, args, kwargs in self.commands:
            getattr(pipe, name)(*args, **kwargs)
        replies: List[Any] = pipe.execute()
        self.commands.clear()
        return replies
