from fastapi import Depends
from sqlalchemy.orm import Session
from emoclass.db.session import SessionLocal, get_db
from emoclass.core.security import get_current_user
from emoclass.services.alerts import AlertTrigger, Notifier
from emoclass.services.notifier import NotifierConfig, TelegramNotifier

def Authed(db: Session = Depends(get_db), user=Depends(get_current_user)):
    return {"db": db, "user_id": user["user_id"], "role": user.get("role")}

def get_notifier() -> Notifier:
    return TelegramNotifier(NotifierConfig.from_settings())

_trigger = AlertTrigger(SessionLocal, get_notifier)

def get_alert_trigger() -> AlertTrigger:
    return _trigger
