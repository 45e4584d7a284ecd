"""The watch loop and the primitives that shape alert delivery."""