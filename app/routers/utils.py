from fastapi import APIRouter


class UtilsRouter:
    def __init__(self, router: APIRouter):
        self.router = router
        self._register_routes()

    def _register_routes(self):
        self.router.get("/health")(self.health)

    @staticmethod
    async def health():
        """Проверка здоровья"""
        return {"status": "ok"}
