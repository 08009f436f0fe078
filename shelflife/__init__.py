"""ShelfLife receipt scanning: OCR text to pantry line items."""
