"""Built-in catalog used when the database holds no catalog or cannot be read."""

DEFAULT_TOUR_TYPES = [
    {
        "id": "islands",
        "label_th": "เกาะและทะเล",
        "label_en": "Islands & Sea",
        "description_th": "ล่องเรือ ชมอ่าว น้ำใส หาดทรายขาว",
        "description_en": "Boat rides, clear bays, and white sand beaches.",
    },
    {
        "id": "heritage",
        "label_th": "วัฒนธรรมและเมืองเก่า",
        "label_en": "Heritage & Old Town",
        "description_th": "เดินชมย่านเก่า คาเฟ่ และชุมชนท้องถิ่น",
        "description_en": "Walkable old town, cafés, and local communities.",
    },
    {
        "id": "adventure",
        "label_th": "ผจญภัยและธรรมชาติ",
        "label_en": "Adventure & Nature",
        "description_th": "น้ำตก เส้นทางเขา และมุมมองพาโนรามา",
        "description_en": "Waterfalls, forest trails, and panoramic viewpoints.",
    },
]

DEFAULT_LOCATIONS = [
    {
        "id": "phuket-cove",
        "name_th": "อ่าวสวรรค์ ภูเก็ต",
        "name_en": "Paradise Cove, Phuket",
        "area_th": "ทะเลอันดามัน",
        "area_en": "Andaman Sea",
        "description_th": "ดำน้ำตื้นในอ่าวลับ และล่องเรือชมพระอาทิตย์ตก",
        "description_en": "Snorkel a hidden bay and cruise home at sunset.",
        "image_path": "phuket-cove.jpg",
        "highlights": ["Snorkeling", "Hidden beach", "Sunset cruise"],
        "tour_type_ids": ["islands"],
        "available_durations": ["full", "half"],
        "price_per_person": {"full": 3200, "half": 1900},
    },
    {
        "id": "chiang-mai",
        "name_th": "ดอยสูง เชียงใหม่",
        "name_en": "Highland Chiang Mai",
        "area_th": "ภาคเหนือ",
        "area_en": "Northern Thailand",
        "description_th": "หมอกยามเช้า ตลาดชาวเขา และไร่ชา",
        "description_en": "Misty mornings, hill tribe markets, and tea estates.",
        "image_path": "chiang-mai-highland.jpg",
        "highlights": ["Misty mornings", "Hill tribe market", "Tea tasting"],
    },
    {
        "id": "ayutthaya",
        "name_th": "อยุธยา เมืองมรดก",
        "name_en": "Ayutthaya Heritage",
        "area_th": "ภาคกลาง",
        "area_en": "Central Thailand",
        "description_th": "วัดเก่าแก่ ล่องแม่น้ำ และงานหัตถกรรมท้องถิ่น",
        "description_en": "Ancient temples, a river cruise, and local crafts.",
        "image_path": "ayutthaya-heritage.jpg",
        "highlights": ["Temple tour", "River cruise", "Local craft"],
        "tour_type_ids": ["heritage"],
        "price_per_person": {"half": 1200},
    },
    {
        "id": "krabi",
        "name_th": "กระบี่ หน้าผาและหาดลับ",
        "name_en": "Krabi Cliffs & Coves",
        "area_th": "ทะเลใต้",
        "area_en": "Southern Sea",
        "description_th": "พายเรือคายัก ผาหินปูน และปิกนิกริมหาด",
        "description_en": "Kayak past limestone cliffs to a beach picnic.",
        "image_path": "krabi-cliffs.jpg",
        "highlights": ["Kayak", "Limestone cliffs", "Beach picnic"],
        "tour_type_ids": ["islands", "adventure"],
        "available_durations": ["full"],
    },
]
