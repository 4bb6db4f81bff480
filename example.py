#!/usr/bin/env python3
"""
Example usage of the JSON Reshaper.

This script demonstrates path lookups, typed extraction, a rule-based
transformation and translating a document with a translation in its own
shape.
"""

from json_reshaper import (
    Json,
    ReshapeError,
    TransformationConfig,
    copy,
    copy_array_of_objects,
    copy_field,
    copy_fields,
    merge_object,
)
from json_reshaper.mappers import HttpsAppender
from json_reshaper.validators import NonEmptyString


GYM = """
{
   "id": 1,
   "slug": "raw-metal",
   "name": "Raw Metal Gym",
   "texts": {
     "name": "Raw metal gym",
     "description": "The best gym in town. Come and visit us today!"
   },
   "images": {
      "top": "//images/top.jpg",
      "background": "//images/background.png"
   },
   "features": [
      {"id": 1, "description": "Convenient location"},
      {"id": 2, "description": "Lots of space"}
   ]
}
"""

TRANSLATION = """
{
   "title": "Metalinis Gymas",
   "media": {"backgroundImage": "//images/translated-background.png"},
   "features": [
      {"id": 2, "description": "space translated"},
      {"id": 1, "description": "location translated"}
   ]
}
"""


def main():
    """Main example function."""
    print("JSON Reshaper Example")
    print("=" * 50)

    gym = Json.parse(GYM)

    print(f"Name: {gym.extract_string('name')}")
    print(f"Feature ids: {gym.extract_list('features.id')}")
    print(f"Has a logo: {gym['images.logo'].exists()}")
    print(f"Phone (optional): {gym.extract_string_optional('phone')}")

    try:
        basic = (TransformationConfig()
                 .add(copy_fields("id", "slug"))
                 .add(copy_field("name", "title"))
                 .add(copy("images")))
        print(f"\nBasic transformation:\n{gym.transform(basic).to_json(pretty=True)}")

        advanced = (TransformationConfig()
                    .add(copy_field("id"))
                    .add(merge_object("texts"))
                    .add(copy_field("images.top", "media.pictures.headerBackground")
                         .with_validators(NonEmptyString)
                         .with_mapper(HttpsAppender)))
        print(f"\nAdvanced transformation:\n{gym.transform(advanced).to_json(pretty=True)}")

        features = TransformationConfig().add(copy_field("description"))
        translation = (TransformationConfig()
                       .add(copy_field("title", "name"))
                       .add(copy_field("media.backgroundImage", "images.background"))
                       .add(copy_array_of_objects("features", features, "id")))
        translated = gym.translate(Json.parse(TRANSLATION), translation)
        print(f"\nTranslated:\n{translated.to_json(pretty=True)}")

        print(f"\nOnly id and slug: {gym.only(['id', 'slug']).to_json()}")

    except ReshapeError as e:
        print(f"❌ Reshaping failed: {e}")


if __name__ == "__main__":
    main()
