from app.models.customer import Customer
from app.models.product import Product
from app.models.order import Order
from app.models.order_item import OrderItem
from app.models.notification import Notification
from app.models.processed_message import ProcessedMessage
from app.models.whatsapp_message_log import WhatsAppMessageLog
