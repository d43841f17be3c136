from channels.generic.websocket import AsyncJsonWebsocketConsumer


class OrderNotificationConsumer(AsyncJsonWebsocketConsumer):
    """Pushes order status changes to the signed-in user's sockets."""

    async def connect(self):
        user = self.scope.get("user")

        if user is None or user.is_anonymous:
            await self.close()
            return
        # every socket joins the group of its user
        self.group_name = f"user_{user.id}"
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()

    async def disconnect(self, code):
        if hasattr(self, "group_name"):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def send_notification(self, event):
        await self.send_json(event["data"])
