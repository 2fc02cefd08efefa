from sqlalchemy import Column, String, Boolean, ForeignKey, Integer, Numeric, Table, Text
from sqlalchemy.orm import relationship
from contenthub.config.database import Base
from contenthub.common.enums import MediaType
from contenthub.models.mixins import SoftDeleteMixin, TimestampMixin, new_id

brand_categories = Table(
    "brand_categories",
    Base.metadata,
    Column("brand_id", String(36), ForeignKey("brands.id", ondelete="CASCADE"), primary_key=True),
    Column("category_id", String(36), ForeignKey("product_categories.id", ondelete="CASCADE"), primary_key=True),
)

class ProductCategory(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "product_categories"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)

    products = relationship("Product", back_populates="category")
    brands = relationship("Brand", secondary=brand_categories, back_populates="categories")

class Brand(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "brands"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    slug = Column(String(100), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    logo_url = Column(String(500), nullable=True)
    website_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    country_of_origin = Column(String(100), nullable=True)
    founded_year = Column(Integer, nullable=True)

    products = relationship("Product", back_populates="brand", lazy="selectin")
    categories = relationship(
        "ProductCategory",
        secondary=brand_categories,
        back_populates="brands",
        lazy="selectin",
    )

    @property
    def active_products_count(self) -> int:
        return sum(1 for product in self.products if product.is_active and not product.is_deleted)

class Product(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    product_code = Column(String(100), unique=True, nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    long_description = Column(Text, nullable=False)
    short_description = Column(String(500), nullable=False)
    sale_price = Column(Numeric(10, 2), nullable=False)
    offer_price = Column(Numeric(10, 2), nullable=True)
    is_offer_active = Column(Boolean, default=False, nullable=False)
    purchase_price = Column(Numeric(10, 2), nullable=False) # internal, never in public views
    available_stock = Column(Integer, default=0, nullable=False)
    stock_limit = Column(Integer, default=0, nullable=False) # reserved units, internal
    weight = Column(Numeric(8, 3), nullable=True)
    size = Column(String(100), nullable=True)
    has_shipping = Column(Boolean, default=True, nullable=False)
    has_pickup = Column(Boolean, default=True, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    main_image_url = Column(String(500), nullable=True)
    main_video_url = Column(String(500), nullable=True)
    thumbnail_small = Column(String(500), nullable=True)
    thumbnail_medium = Column(String(500), nullable=True)
    thumbnail_large = Column(String(500), nullable=True)
    category_id = Column(String(36), ForeignKey("product_categories.id"), nullable=False, index=True)
    brand_id = Column(String(36), ForeignKey("brands.id"), nullable=True, index=True)

    category = relationship("ProductCategory", back_populates="products", lazy="joined")
    brand = relationship("Brand", back_populates="products", lazy="joined")
    media = relationship(
        "ProductMedia",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductMedia.sort_order",
        lazy="selectin",
    )

    @property
    def is_in_stock(self) -> bool:
        return self.available_stock > self.stock_limit

    @property
    def current_price(self):
        if self.is_offer_active and self.offer_price:
            return self.offer_price
        return self.sale_price

    @property
    def is_on_sale(self) -> bool:
        return bool(
            self.is_offer_active
            and self.offer_price is not None
            and self.offer_price < self.sale_price
        )

class ProductMedia(TimestampMixin, Base):
    __tablename__ = "product_media"

    id = Column(String(36), primary_key=True, default=new_id)
    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(10), default=MediaType.IMAGE.value, nullable=False)
    url = Column(String(500), nullable=False)
    thumbnail_small = Column(String(500), nullable=True)
    thumbnail_medium = Column(String(500), nullable=True)
    thumbnail_large = Column(String(500), nullable=True)
    alt_text = Column(String(255), nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    product = relationship("Product", back_populates="media")
