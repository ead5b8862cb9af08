from config import db


class Secrets(db.Model):
    __tablename__ = "secrets"
    name = db.Column(db.String(64), primary_key=True)
    # base64
    value = db.Column(db.String, nullable=False)
    created_at = db.Column(db.Integer)

    def __init__(self, name, value, created_at):
        self.name = name
        self.value = value
        self.created_at = created_at
