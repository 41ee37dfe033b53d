"""ORM foundation: declarative Base and the createdAt/updatedAt mixin shared by the four gateway tables."""
